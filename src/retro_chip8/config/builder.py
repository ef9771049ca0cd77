from typing import Tuple
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import MEMORY_SIZE

# @intent:responsibility バス、メモリ、CPUを生成・接続します。
class MachineBuilder:
    def build_machine(self) -> Tuple[Chip8Cpu, Bus]:
        bus = Bus()
        bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
        cpu = Chip8Cpu(bus)
        return cpu, bus
