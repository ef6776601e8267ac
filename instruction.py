from dataclasses import dataclass
from enum import Enum
from typing import Optional
from constants import MAX_ADDRESS
import logging
import re

LOGGER = logging.getLogger("csim")

# " L 10,1" -> op, hex address, size. Valgrind writes instruction loads without the leading space.
TRACE_LINE_RE = re.compile(r"^\s*(\S+)\s+([0-9a-fA-F]+)\s*,\s*(\d+)\s*$")


class InstructionType(Enum):
    INSTRUCTION = "I"
    LOAD = "L"
    STORE = "S"
    MODIFY = "M"


@dataclass
class Instruction:
    type: InstructionType
    address: int
    size: int

    def accesses(self) -> int:
        """Number of data cache accesses this record performs."""
        match self.type:
            case InstructionType.LOAD | InstructionType.STORE:
                return 1
            case InstructionType.MODIFY:
                return 2
            case _:
                return 0

    def __str__(self):
        return f"{self.type.value} {self.address:x},{self.size}"


def parse_line(line: str) -> Optional[Instruction]:
    """
    Parse one trace record. Returns None for lines that are not shaped like a
    record, for addresses wider than 64 bits, for sizes too long to convert
    and for unknown op codes.
    """
    match = TRACE_LINE_RE.match(line)
    if not match:
        LOGGER.debug(f"Skipping malformed trace line: {line.rstrip()!r}")
        return None
    op, address, size = match.groups()
    address = int(address, 16)
    if address > MAX_ADDRESS:
        LOGGER.debug(f"Skipping trace line with out of range address: {line.rstrip()!r}")
        return None
    try:
        instr_type = InstructionType(op)
    except ValueError:
        LOGGER.debug(f"Ignoring unknown operation {op!r}")
        return None
    try:
        size = int(size)
    except ValueError:
        LOGGER.debug(f"Skipping trace line with unreadable size: {line[:80].rstrip()!r}")
        return None
    return Instruction(instr_type, address, size)
