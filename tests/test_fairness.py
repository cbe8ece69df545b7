"""Conformance tests for the provably-fair core.

Covers:
- Commitment and combined-seed derivation
- Xorshift32 seeding and stream
- The published reference round (seed, draws, peg map, bin)
"""

import pytest

from plinko.utils.commit_reveal import derive_combined_seed, derive_commitment, generate_round_secret
from plinko.utils.crypto import sha256_hex
from plinko.utils.errors import FairnessError, InvalidInput, InvalidSeedMaterial
from plinko.utils.prng import Xorshift32, init_generator
from plinko.services.engine import play_round, simulate

SERVER_SEED = "b2a5f3f32a4d9c6ee7a8c1d33456677890abcdeffedcba0987654321ffeeddcc"
NONCE = "42"
CLIENT_SEED = "candidate-hello"
COMMIT_HEX = "bb9acdc67f3f18f3345236a01f0e5072596657a9005c7d8a22cff061451a6b34"
COMBINED_SEED = "e1dddf77de27d395ea2be2ed49aa2a59bd6bf12ee8d350c16c008abd406c07e0"
FIRST_DRAWS = [0.1106166649, 0.7625129214, 0.0439292176, 0.4578678815, 0.3438999297]


class TestReferenceVector:
    """The published reference round must be reproduced exactly."""

    def test_commitment(self):
        """Test commitment matches the published value."""
        assert derive_commitment(SERVER_SEED, NONCE) == COMMIT_HEX

    def test_combined_seed(self):
        """Test combined seed matches the published value."""
        assert derive_combined_seed(SERVER_SEED, CLIENT_SEED, NONCE) == COMBINED_SEED

    def test_first_draws(self):
        """Test the first five draws match to 10 decimals."""
        prng = init_generator(COMBINED_SEED)
        draws = [prng.rand() for _ in range(5)]
        assert draws == pytest.approx(FIRST_DRAWS, abs=1e-10)

    def test_peg_map_first_rows(self):
        """Test the first three peg rows match the published biases."""
        result = simulate(init_generator(COMBINED_SEED), 6)
        board = result.board
        assert board[0][0].left_bias == 0.422123
        assert [peg.left_bias for peg in board[1].pegs] == [0.552503, 0.408786]
        assert board[2][0].left_bias == 0.491574

    def test_bin_index(self):
        """Test the center drop lands in bin 6."""
        result = simulate(init_generator(COMBINED_SEED), 6)
        assert result.bin_index == 6

    def test_canonical_board_text(self):
        """Test the hashed board text layout and its digest."""
        result = simulate(init_generator(COMBINED_SEED), 6)
        text = result.board.canonical_json()
        assert text.startswith('[[{"leftBias":0.422123}],[{"leftBias":0.552503},{"leftBias":0.408786}],')
        assert result.peg_map_hash == sha256_hex(text)

    def test_play_round_pipeline(self):
        """Test the full pipeline from disclosed inputs."""
        combined_seed, result = play_round(SERVER_SEED, CLIENT_SEED, NONCE, 6)
        assert combined_seed == COMBINED_SEED
        assert result.bin_index == 6


class TestCommitReveal:
    """Commitment and seed derivation."""

    def test_commitment_is_deterministic(self):
        """Test identical inputs give identical commitments."""
        assert derive_commitment("abc", "1") == derive_commitment("abc", "1")

    def test_commitment_uses_colon_separator(self):
        """Test commitment hashes server_seed:nonce."""
        assert derive_commitment("abc", "1") == sha256_hex("abc:1")
        assert derive_commitment("abc", "1") != sha256_hex("abc1")

    def test_combined_seed_uses_colon_separators(self):
        """Test combined seed hashes server:client:nonce."""
        assert derive_combined_seed("s", "c", "n") == sha256_hex("s:c:n")

    def test_digest_shape(self):
        """Test digests are 64 lowercase hex characters."""
        digest = derive_commitment(SERVER_SEED, NONCE)
        assert len(digest) == 64
        assert digest == digest.lower()
        int(digest, 16)

    @pytest.mark.parametrize("field", ["server_seed", "client_seed", "nonce"])
    def test_single_character_change_changes_seed(self, field):
        """Test changing one character of any input changes the seed."""
        inputs = {"server_seed": SERVER_SEED, "client_seed": CLIENT_SEED, "nonce": NONCE}
        base = derive_combined_seed(**inputs)
        inputs[field] = inputs[field][:-1] + ("x" if inputs[field][-1] != "x" else "y")
        assert derive_combined_seed(**inputs) != base

    def test_client_seed_changes_are_all_distinct(self):
        """Test 200 client seeds give 200 distinct combined seeds."""
        seeds = {derive_combined_seed(SERVER_SEED, f"client-{i}", NONCE) for i in range(200)}
        assert len(seeds) == 200

    @pytest.mark.parametrize("server_seed,nonce", [("", "1"), ("abc", ""), (None, "1")])
    def test_commitment_rejects_empty_inputs(self, server_seed, nonce):
        """Test empty or missing commitment inputs are rejected."""
        with pytest.raises(InvalidInput):
            derive_commitment(server_seed, nonce)

    def test_combined_seed_rejects_empty_client_seed(self):
        """Test an empty client seed is rejected."""
        with pytest.raises(InvalidInput):
            derive_combined_seed(SERVER_SEED, "", NONCE)

    def test_errors_share_a_base(self):
        """Test every core error is a FairnessError and a ValueError."""
        assert issubclass(InvalidInput, FairnessError)
        assert issubclass(InvalidSeedMaterial, FairnessError)
        assert issubclass(FairnessError, ValueError)

    def test_generate_round_secret(self):
        """Test default secret material sizes and freshness."""
        server_seed, nonce = generate_round_secret()
        assert len(server_seed) == 64
        assert len(nonce) == 16
        assert generate_round_secret()[0] != server_seed

    def test_generate_round_secret_custom_sizes(self):
        """Test explicit byte counts override the settings."""
        server_seed, nonce = generate_round_secret(seed_bytes=4, nonce_bytes=2)
        assert len(server_seed) == 8
        assert len(nonce) == 4


class TestXorshift32:
    """Generator seeding and stream."""

    def test_zero_seed_is_replaced(self):
        """Test a zero seed becomes 1."""
        assert Xorshift32(0).state == 1

    def test_seed_is_truncated_to_32_bits(self):
        """Test seeds are masked to 32 bits before the zero check."""
        assert Xorshift32(0x1_0000_0005).state == 5
        assert Xorshift32(0x1_0000_0000).state == 1

    def test_first_step_from_one(self):
        """Test one xorshift step from state 1."""
        prng = Xorshift32(1)
        assert prng.next_u32() == 270369
        assert prng.state == 270369

    def test_state_stays_32_bit_and_nonzero(self):
        """Test the state never leaves 1..2**32-1."""
        prng = Xorshift32(0xFFFFFFFF)
        for _ in range(1000):
            value = prng.next_u32()
            assert 0 < value <= 0xFFFFFFFF

    def test_rand_range(self):
        """Test rand stays in [0, 1)."""
        prng = Xorshift32(123456789)
        for _ in range(1000):
            assert 0.0 <= prng.rand() < 1.0

    def test_same_seed_same_stream(self):
        """Test two generators from one digest produce the same stream."""
        a = init_generator(COMBINED_SEED)
        b = init_generator(COMBINED_SEED)
        assert [a.rand() for _ in range(50)] == [b.rand() for _ in range(50)]

    def test_draw_counter(self):
        """Test draws counts consumed values."""
        prng = Xorshift32(7)
        for _ in range(3):
            prng.rand()
        assert prng.draws == 3

    def test_seed_is_big_endian_first_four_bytes(self):
        """Test the seed is the first 4 raw bytes, big-endian."""
        assert init_generator(COMBINED_SEED).state == 0xE1DDDF77
        assert init_generator("01020304").state == 0x01020304

    def test_uppercase_hex_accepted(self):
        """Test uppercase hex decodes to the same seed."""
        assert init_generator(COMBINED_SEED.upper()).state == 0xE1DDDF77

    def test_zero_seed_digest_falls_back_to_one(self):
        """Test a digest starting with four zero bytes seeds state 1."""
        assert init_generator("00000000" + "ab" * 28).state == 1

    @pytest.mark.parametrize("material", ["", "abc", "010203", "0102030", "zz010203", None, 1234])
    def test_short_seed_material_is_rejected(self, material):
        """Test fewer than 4 decodable bytes is rejected."""
        with pytest.raises(InvalidSeedMaterial):
            init_generator(material)

    def test_trailing_garbage_after_four_bytes(self):
        """Test trailing non-hex after 4 bytes is ignored."""
        assert init_generator("01020304zz").state == 0x01020304
