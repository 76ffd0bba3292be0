"""
Hex / Path Helper Unit Tests
"""

import pytest

from tenderly_client.utils import (
    encode_path_segment,
    from_hex,
    from_optional_hex,
    to_hex_wei,
)


class TestHexWei:
    """测试 wei 与十六进制转换"""

    @pytest.mark.parametrize("amount", [0, 1, 15, 16, 255, 10**18, 2**256 - 1])
    def test_round_trip(self, amount):
        """测试转换后可还原"""
        assert int(to_hex_wei(amount), 16) == amount
        assert from_hex(to_hex_wei(amount)) == amount

    def test_zero(self):
        """测试 0 的表示"""
        assert to_hex_wei(0) == "0x0"

    def test_lowercase_without_leading_zeros(self):
        """测试小写且无前导零"""
        assert to_hex_wei(10**18) == "0xde0b6b3a7640000"
        assert to_hex_wei(0xABC) == "0xabc"

    def test_negative(self):
        """测试负数报错"""
        with pytest.raises(ValueError):
            to_hex_wei(-1)

    def test_block_number(self):
        """测试解析十六进制区块号"""
        assert from_hex("0x170abab") == 24161195
        assert from_optional_hex(None) is None


class TestEncodePathSegment:
    """测试路径段编码"""

    def test_plain_id(self):
        """测试普通 ID 不变"""
        assert encode_path_segment("abc-123_x.y") == "abc-123_x.y"

    @pytest.mark.parametrize("raw", ["a/b", "a b", "a?b=c", "a#b", "ä/ö"])
    def test_reserved_characters(self, raw):
        """测试保留字符被转义，路径段数量不变"""
        encoded = encode_path_segment(raw)
        assert "/" not in encoded
        assert "?" not in encoded
        assert " " not in encoded
        assert "#" not in encoded
        assert encoded.isascii()
        assert len(f"/simulations/{encoded}/info".split("/")) == 4


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
