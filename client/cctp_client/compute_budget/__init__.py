from .instructions import (
    InstructionCode,
    set_compute_unit_limit_ix,
    set_compute_unit_price_ix,
)

__all__ = [
    "InstructionCode",
    "set_compute_unit_limit_ix",
    "set_compute_unit_price_ix",
]
