# tests/arch/chip8/test_decoder.py
"""
CHIP-8命令デコーダ（パターンテーブル）の単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.instructions import decode_opcode, match_instruction, UNKNOWN_MNEMONIC
from retro_chip8.arch.chip8.instructions.base import (
    split_nibbles, concat_digits, compile_pattern, specificity, read_word,
)
from retro_chip8.arch.chip8.instructions.maps import INSTRUCTION_TABLE, DECODE_TABLE, EXECUTE_MAP
from retro_chip8.transport.bus import Bus, RAM

# @intent:test_suite 命令語のニブル分割、パターン照合、オペランド抽出を検証します。

class TestBaseUtilities:
    def test_split_nibbles(self):
        assert split_nibbles(0xD12F) == (0xD, 0x1, 0x2, 0xF)

    # @intent:test_case_concat 3つのニブルを上位から連結することを検証します。
    def test_concat_digits(self):
        assert concat_digits(0xF, 0xA, 0x7) == 0xFA7
        assert concat_digits(0, 0, 1) == 0x001

    def test_concat_digits_rejects_wide_values(self):
        with pytest.raises(ValueError):
            concat_digits(0x10, 0, 0)

    def test_compile_pattern(self):
        assert compile_pattern("8xy4") == (0xF00F, 0x8004)
        assert compile_pattern("00E0") == (0xFFFF, 0x00E0)
        assert compile_pattern("1nnn") == (0xF000, 0x1000)
        assert compile_pattern("Fx65") == (0xF0FF, 0xF065)

    def test_compile_pattern_invalid_length(self):
        with pytest.raises(ValueError):
            compile_pattern("8xy")

    def test_specificity(self):
        assert specificity("00E0") == 4
        assert specificity("8xy4") == 2
        assert specificity("Dxyn") == 1

    def test_read_word_big_endian(self):
        bus = Bus()
        bus.register_device(0x000, 0xFFF, RAM(0x1000))
        bus.load(0x200, b"\xA2\xF0")
        assert read_word(bus, 0x200) == 0xA2F0

class TestInstructionTable:
    def test_patterns_are_unique(self):
        patterns = [entry.pattern for entry in INSTRUCTION_TABLE]
        assert len(patterns) == len(set(patterns))
        assert set(EXECUTE_MAP) == set(patterns)

    # @intent:test_case_order デコードテーブルが具体性の降順に並んでいることを検証します。
    def test_decode_table_sorted_by_specificity(self):
        scores = [specificity(d.entry.pattern) for d in DECODE_TABLE]
        assert scores == sorted(scores, reverse=True)

    def test_specific_pattern_wins(self):
        # 00E0 / 00EE は 0nnn 系より優先される。FFFF は Fx?? 系より優先される。
        assert match_instruction(0x00E0).mnemonic == "CLS"
        assert match_instruction(0x00EE).mnemonic == "RET"
        assert match_instruction(0xFFFF).mnemonic == "HALT"

class TestDecodeOpcode:
    @pytest.mark.parametrize("opcode, pattern, text", [
        (0x00E0, "00E0", "CLS"),
        (0x00EE, "00EE", "RET"),
        (0x1ABC, "1nnn", "JP $ABC"),
        (0x2300, "2nnn", "CALL $300"),
        (0x3A2B, "3xkk", "SE VA, #2B"),
        (0x4A2B, "4xkk", "SNE VA, #2B"),
        (0x5120, "5xy0", "SE V1, V2"),
        (0x6005, "6xkk", "LD V0, #05"),
        (0x7F01, "7xkk", "ADD VF, #01"),
        (0x8120, "8xy0", "LD V1, V2"),
        (0x8121, "8xy1", "OR V1, V2"),
        (0x8122, "8xy2", "AND V1, V2"),
        (0x8123, "8xy3", "XOR V1, V2"),
        (0x8124, "8xy4", "ADD V1, V2"),
        (0x8125, "8xy5", "SUB V1, V2"),
        (0x8126, "8xy6", "SHR V1"),
        (0x8127, "8xy7", "SUBN V1, V2"),
        (0x812E, "8xyE", "SHL V1"),
        (0x9120, "9xy0", "SNE V1, V2"),
        (0xA2F0, "Annn", "LD I, $2F0"),
        (0xB200, "Bnnn", "JP V0, $200"),
        (0xC30F, "Cxkk", "RND V3, #0F"),
        (0xD125, "Dxyn", "DRW V1, V2, 5"),
        (0xE19E, "Ex9E", "SKP V1"),
        (0xE1A1, "ExA1", "SKNP V1"),
        (0xF107, "Fx07", "LD V1, DT"),
        (0xF10A, "Fx0A", "LD V1, K"),
        (0xF115, "Fx15", "LD DT, V1"),
        (0xF118, "Fx18", "LD ST, V1"),
        (0xF11E, "Fx1E", "ADD I, V1"),
        (0xF129, "Fx29", "LD F, V1"),
        (0xF133, "Fx33", "LD B, V1"),
        (0xF155, "Fx55", "LD [I], V1"),
        (0xF165, "Fx65", "LD V1, [I]"),
        (0xFFFF, "FFFF", "HALT"),
    ])
    def test_decode_all_patterns(self, opcode, pattern, text):
        op = decode_opcode(opcode, 0x200)
        assert op.pattern == pattern
        assert op.text() == text
        assert op.opcode == opcode
        assert op.address == 0x200
        assert op.length == 2

    # @intent:test_case_operands オペランド値がパターン中の出現順に抽出されることを検証します。
    def test_operand_values(self):
        assert decode_opcode(0x1FA7).operand_values == [0xFA7]
        assert decode_opcode(0x6A2B).operand_values == [0xA, 0x2B]
        assert decode_opcode(0x8AB4).operand_values == [0xA, 0xB]
        assert decode_opcode(0xD12F).operand_values == [0x1, 0x2, 0xF]
        assert decode_opcode(0xF333).operand_values == [0x3]

    @pytest.mark.parametrize("opcode", [0x0123, 0x5121, 0x8008, 0x9AB1, 0xE000, 0xF0FF, 0xFF00])
    def test_unknown_opcode(self, opcode):
        op = decode_opcode(opcode, 0x300)
        assert op.mnemonic == UNKNOWN_MNEMONIC
        assert op.pattern == ""
        assert op.text() == f"UNKNOWN #{opcode:04X}"
        assert match_instruction(opcode) is None

    def test_opcode_out_of_range(self):
        with pytest.raises(ValueError):
            decode_opcode(0x10000)
        with pytest.raises(ValueError):
            decode_opcode(-1)
