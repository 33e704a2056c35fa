from cctp_client.compute_budget import set_compute_unit_limit_ix, set_compute_unit_price_ix
from cctp_client.program_ids import COMPUTE_BUDGET_PROGRAM_ID


def test_set_compute_unit_limit_ix():
    ix = set_compute_unit_limit_ix(73_737)
    assert ix.program_id == COMPUTE_BUDGET_PROGRAM_ID
    assert ix.accounts == []
    assert bytes(ix.data) == bytes([2]) + (73_737).to_bytes(4, "little")
    assert bytes(ix.data).hex() == "0209200100"


def test_set_compute_unit_price_ix():
    ix = set_compute_unit_price_ix(100_000)
    assert ix.program_id == COMPUTE_BUDGET_PROGRAM_ID
    assert ix.accounts == []
    assert bytes(ix.data) == bytes([3]) + (100_000).to_bytes(8, "little")


def test_defaults():
    assert set_compute_unit_limit_ix() == set_compute_unit_limit_ix(73_737)
    assert set_compute_unit_price_ix() == set_compute_unit_price_ix(100_000)
