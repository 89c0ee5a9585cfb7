import pytest

from compress import (
    H_INIT,
    K_VALUES,
    MASK32,
    _rotr,
    _shr,
    big_sigma0,
    big_sigma1,
    ch,
    compress64,
    compression,
    maj,
    small_sigma0,
    small_sigma1,
)


def test_constant_tables():
    assert len(K_VALUES) == 64
    assert len(H_INIT) == 8
    assert K_VALUES[0] == 0x428A2F98
    assert K_VALUES[63] == 0xC67178F2
    assert H_INIT[0] == 0x6A09E667
    assert H_INIT[7] == 0x5BE0CD19
    assert all(0 <= k <= MASK32 for k in K_VALUES)
    # Tuples, so there is no mutation path.
    assert isinstance(K_VALUES, tuple)
    assert isinstance(H_INIT, tuple)


@pytest.mark.parametrize(
    "x,n,expected",
    [
        (0x00000001, 1, 0x80000000),
        (0x80000000, 31, 0x00000001),
        (0x12345678, 8, 0x78123456),
        (0xFFFFFFFF, 13, 0xFFFFFFFF),
    ],
)
def test_rotr(x, n, expected):
    assert _rotr(x, n) == expected


def test_shr_zero_fills():
    assert _shr(0x80000000, 3) == 0x10000000
    assert _shr(0xFFFFFFFF, 10) == 0x003FFFFF


def test_sigma_functions():
    assert small_sigma0(0) == 0
    assert small_sigma1(0x18) == 0x000F0000
    assert big_sigma0(0xFFFFFFFF) == 0xFFFFFFFF
    assert big_sigma1(0xFFFFFFFF) == 0xFFFFFFFF
    # sigma0 has a shift, so a single high bit does not come back around.
    assert small_sigma0(0x00000001) == _rotr(1, 7) ^ _rotr(1, 18)


def test_ch_and_maj():
    assert ch(0xFFFFFFFF, 0x12345678, 0x9ABCDEF0) == 0x12345678
    assert ch(0x00000000, 0x12345678, 0x9ABCDEF0) == 0x9ABCDEF0
    assert ch(0xFFFF0000, 0xAAAAAAAA, 0x55555555) == 0xAAAA5555
    assert maj(0xFFFFFFFF, 0x00000000, 0x0F0F0F0F) == 0x0F0F0F0F
    assert maj(0xF0F0F0F0, 0xF0F0F0F0, 0x00000000) == 0xF0F0F0F0


def test_compression_wraps_on_overflow():
    """Every sum in this round exceeds 32 bits and must wrap silently."""
    ones = 0xFFFFFFFF
    out = compression(ones, ones, ones, ones, ones, ones, ones, ones, ones, ones)

    # T1 = 5 * (2**32 - 1) mod 2**32, T2 = 2 * (2**32 - 1) mod 2**32.
    assert out == (
        0xFFFFFFF9,
        ones,
        ones,
        ones,
        0xFFFFFFFA,
        ones,
        ones,
        ones,
    )
    assert all(0 <= word <= MASK32 for word in out)


def test_compression_first_round_of_abc():
    """Round t=0 for the one-block message "abc" (FIPS 180-4 example)."""
    out = compression(*H_INIT, 0x61626380, K_VALUES[0])
    assert out == (
        0x5D6AEBCD,
        0x6A09E667,
        0xBB67AE85,
        0x3C6EF372,
        0xFA2A4622,
        0x510E527F,
        0x9B05688C,
        0x1F83D9AB,
    )


def test_compress64_rejects_short_schedule():
    with pytest.raises(ValueError):
        compress64(*H_INIT, [0] * 63)


def test_compress64_matches_repeated_rounds():
    ws = [((0x67452301 + i * 0x01020304) & MASK32) for i in range(64)]

    state = H_INIT
    for i in range(64):
        state = compression(*state, ws[i], K_VALUES[i])

    assert compress64(*H_INIT, ws) == state


def test_compress64_trace_records_every_round():
    ws = [i for i in range(64)]
    trace = []
    final = compress64(*H_INIT, ws, trace=trace)

    assert len(trace) == 64
    assert trace[-1] == final
    assert trace[0] == compression(*H_INIT, ws[0], K_VALUES[0])
