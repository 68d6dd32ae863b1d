import pytest

from xfer.core.exceptions import ContractViolation, TransferError
from xfer.domain.transfer.models import FileEntry, FileKind, TransferOutcome, TransferStatus


def make_outcome(kind=FileKind.FILE, name="a.txt") -> TransferOutcome:
    return TransferOutcome(
        kind=kind,
        name=name,
        remote_path=f"/r/{name}",
        local_path=f"/l/{name}",
    )


def test_succeeded_outcome_projects_remote_entry() -> None:
    outcome = make_outcome().finalize(TransferStatus.SUCCEEDED, size=42)

    entry = outcome.to_file_entry(False)

    assert entry == FileEntry(kind=FileKind.FILE, size=42, name="a.txt", full_path="/r/a.txt")


def test_projection_selects_path_side() -> None:
    outcome = make_outcome(kind=FileKind.DIRECTORY, name="photos").skip(0)

    local = outcome.to_file_entry(True)
    remote = outcome.to_file_entry(False)

    assert local.full_path == "/l/photos"
    assert remote.full_path == "/r/photos"
    for entry in (local, remote):
        assert entry.kind is FileKind.DIRECTORY
        assert entry.size == outcome.size
        assert entry.name == outcome.name


def test_failed_outcome_keeps_error_verbatim() -> None:
    timeout = TransferError("network timeout")
    outcome = make_outcome().finalize(TransferStatus.FAILED, size=0, error=timeout)

    assert outcome.error is timeout
    assert outcome.status is TransferStatus.FAILED
    assert outcome.is_failed
    assert not outcome.is_skipped
    assert not outcome.is_success


def test_failed_outcome_without_size_stores_zero() -> None:
    outcome = make_outcome().fail(OSError("disk full"))

    assert outcome.size == 0
    assert outcome.is_failed


def test_rule_skip_is_also_a_skip() -> None:
    outcome = make_outcome().finalize(TransferStatus.SKIPPED_BY_RULE, size=0)

    assert outcome.is_skipped
    assert outcome.is_skipped_by_rule
    assert not outcome.is_success
    assert not outcome.is_failed
    assert outcome.error is None


def test_plain_skip_is_not_a_rule_skip() -> None:
    outcome = make_outcome().skip(10)

    assert outcome.status is TransferStatus.SKIPPED
    assert outcome.is_skipped
    assert not outcome.is_skipped_by_rule
    assert outcome.size == 10


def test_second_finalize_is_rejected_and_first_values_kept() -> None:
    outcome = make_outcome().succeed(42)

    with pytest.raises(ContractViolation):
        outcome.finalize(TransferStatus.FAILED, size=0, error=TransferError("late"))

    assert outcome.status is TransferStatus.SUCCEEDED
    assert outcome.size == 42
    assert outcome.error is None


@pytest.mark.parametrize(
    "status",
    [TransferStatus.SUCCEEDED, TransferStatus.SKIPPED, TransferStatus.SKIPPED_BY_RULE],
)
def test_error_on_non_failed_status_is_rejected(status) -> None:
    outcome = make_outcome()

    with pytest.raises(ContractViolation):
        outcome.finalize(status, size=1, error=TransferError("boom"))

    assert not outcome.is_finalized


def test_failed_without_error_is_rejected() -> None:
    outcome = make_outcome()

    with pytest.raises(ContractViolation):
        outcome.finalize(TransferStatus.FAILED, size=0)

    assert not outcome.is_finalized


def test_missing_size_on_success_is_rejected() -> None:
    with pytest.raises(ContractViolation):
        make_outcome().finalize(TransferStatus.SUCCEEDED)


@pytest.mark.parametrize("size", [-1, 1.5, "10", True])
def test_invalid_size_is_rejected(size) -> None:
    with pytest.raises(ContractViolation):
        make_outcome().finalize(TransferStatus.SUCCEEDED, size=size)


def test_unknown_status_is_rejected() -> None:
    with pytest.raises(ContractViolation):
        make_outcome().finalize("done", size=1)


def test_status_accepts_string_value() -> None:
    outcome = make_outcome().finalize("skipped_by_rule", size=0)

    assert outcome.status is TransferStatus.SKIPPED_BY_RULE


def test_reads_before_finalization_raise() -> None:
    outcome = make_outcome()

    assert not outcome.is_finalized
    with pytest.raises(ContractViolation):
        outcome.to_file_entry(True)
    with pytest.raises(ContractViolation):
        _ = outcome.status
    with pytest.raises(ContractViolation):
        _ = outcome.size
    with pytest.raises(ContractViolation):
        outcome.to_dict()
    with pytest.raises(ContractViolation):
        _ = outcome.error
    for query in ("is_success", "is_skipped", "is_skipped_by_rule", "is_failed"):
        with pytest.raises(ContractViolation):
            getattr(outcome, query)


def test_finalized_outcome_is_read_only() -> None:
    outcome = make_outcome().succeed(5)

    with pytest.raises(ContractViolation):
        outcome.name = "b.txt"
    with pytest.raises(ContractViolation):
        outcome.local_path = "/elsewhere"
    with pytest.raises(ContractViolation):
        outcome._size = 99

    assert outcome.name == "a.txt"
    assert outcome.size == 5


def test_finalized_outcome_rejects_attribute_deletion() -> None:
    outcome = make_outcome().succeed(5)

    with pytest.raises(ContractViolation):
        del outcome.remote_path

    assert outcome.remote_path == "/r/a.txt"


def test_unknown_kind_is_rejected() -> None:
    with pytest.raises(ContractViolation):
        TransferOutcome(kind="bogus", name="x", remote_path="/r/x", local_path="/l/x")


def test_kind_accepts_string_value() -> None:
    outcome = TransferOutcome(kind="link", name="l", remote_path="/r/l", local_path="/l/l")

    assert outcome.kind is FileKind.LINK


def test_for_paths_derives_name_from_remote_path() -> None:
    outcome = TransferOutcome.for_paths(FileKind.FILE, "/data/in/report.csv", "/tmp/report.csv")
    directory = TransferOutcome.for_paths(FileKind.DIRECTORY, "/data/in/", "/tmp/in")

    assert outcome.name == "report.csv"
    assert directory.name == "in"


def test_to_dict_renders_error_as_text() -> None:
    outcome = make_outcome().fail(TransferError("permission denied"), size=3)

    data = outcome.to_dict()

    assert data["status"] == "failed"
    assert data["kind"] == "file"
    assert data["size"] == 3
    assert data["error"] == "permission denied"
    assert data["remote_path"] == "/r/a.txt"


def test_file_entry_is_immutable_value() -> None:
    entry = FileEntry(kind=FileKind.FILE, size=1, name="x", full_path="/x")

    assert entry == FileEntry(kind=FileKind.FILE, size=1, name="x", full_path="/x")
    assert entry.to_dict() == {"kind": "file", "size": 1, "name": "x", "full_path": "/x"}
    with pytest.raises(AttributeError):
        entry.size = 2
