from podite import U8, U32, U64, pod, Enum
from solders.instruction import Instruction

from cctp_client.program_ids import COMPUTE_BUDGET_PROGRAM_ID

DEFAULT_COMPUTE_UNIT_LIMIT = 73_737
DEFAULT_COMPUTE_UNIT_PRICE = 100_000  # micro-lamports per unit


@pod
class InstructionCode(Enum[U8]):
    RequestUnitsDeprecated = 0
    RequestHeapFrame = 1
    SetComputeUnitLimit = 2
    SetComputeUnitPrice = 3
    SetLoadedAccountsDataSizeLimit = 4


@pod
class SetComputeUnitLimitParams:
    instr: InstructionCode
    units: U32


@pod
class SetComputeUnitPriceParams:
    instr: InstructionCode
    micro_lamports: U64


def set_compute_unit_limit_ix(units: int = DEFAULT_COMPUTE_UNIT_LIMIT) -> Instruction:
    return Instruction(
        program_id=COMPUTE_BUDGET_PROGRAM_ID,
        accounts=[],
        data=SetComputeUnitLimitParams.to_bytes(SetComputeUnitLimitParams(
            instr=InstructionCode.SetComputeUnitLimit,
            units=units,
        )),
    )


def set_compute_unit_price_ix(micro_lamports: int = DEFAULT_COMPUTE_UNIT_PRICE) -> Instruction:
    return Instruction(
        program_id=COMPUTE_BUDGET_PROGRAM_ID,
        accounts=[],
        data=SetComputeUnitPriceParams.to_bytes(SetComputeUnitPriceParams(
            instr=InstructionCode.SetComputeUnitPrice,
            micro_lamports=micro_lamports,
        )),
    )
