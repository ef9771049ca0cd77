import unittest

from retro_chip8.arch.chip8.state import Chip8CpuState, RegisterFile, Keypad
from retro_chip8.core.errors import StackOverflowError, StackUnderflowError

class TestRegisterFile(unittest.TestCase):
    def test_read_write(self):
        regs = RegisterFile()
        regs[0xF] = 0xFF
        self.assertEqual(regs[0xF], 0xFF)
        self.assertEqual(len(regs), 16)

    def test_invalid_index_and_value(self):
        regs = RegisterFile()
        with self.assertRaises(ValueError):
            regs[16] = 0
        with self.assertRaises(ValueError):
            regs[0] = 0x100
        with self.assertRaises(ValueError):
            _ = regs[-1]

    def test_equality(self):
        a, b = RegisterFile(), RegisterFile()
        self.assertEqual(a, b)
        a[1] = 1
        self.assertNotEqual(a, b)
        a.clear()
        self.assertEqual(a, b)

class TestKeypad(unittest.TestCase):
    def test_first_pressed(self):
        keypad = Keypad()
        self.assertIsNone(keypad.first_pressed())
        keypad.set(0xE, True)
        keypad.set(0x3, True)
        self.assertEqual(keypad.first_pressed(), 0x3)
        keypad.release_all()
        self.assertIsNone(keypad.first_pressed())

class TestChip8CpuState(unittest.TestCase):
    def test_push_pop(self):
        state = Chip8CpuState()
        state.push(0x202)
        state.push(0x304)
        self.assertEqual(state.pop(), 0x304)
        self.assertEqual(state.pop(), 0x202)
        self.assertEqual(state.sp, 0)

    def test_push_overflow(self):
        state = Chip8CpuState()
        for k in range(16):
            state.push(0x200 + k)
        with self.assertRaises(StackOverflowError):
            state.push(0x300)
        self.assertEqual(state.sp, 16)
        self.assertEqual(state.stack[15], 0x20F)

    def test_pop_underflow(self):
        with self.assertRaises(StackUnderflowError):
            Chip8CpuState().pop()

    def test_tick_timers_floor(self):
        state = Chip8CpuState(delay_timer=1, sound_timer=0)
        state.tick_timers()
        state.tick_timers()
        self.assertEqual(state.delay_timer, 0)
        self.assertEqual(state.sound_timer, 0)

    def test_vf_accessor(self):
        state = Chip8CpuState()
        state.vf = 1
        self.assertEqual(state.v[0xF], 1)

if __name__ == '__main__':
    unittest.main()
