import pytest

from dbcleanup.core.cleanup import DatabaseCleanupOperation
from dbcleanup.core.errors import ConfigurationError, DeletionError, NetworkError
from dbcleanup.core.models import (
    CIContext,
    DatabaseRecord,
    OperationInputs,
    ResolutionStrategy,
)


class _Provider:
    def __init__(self, databases=None, delete_error: Exception | None = None):
        self.databases = databases or []
        self.delete_error = delete_error
        self.calls: list[str] = []

    def find_database_by_name(self, project_id: str, name: str):
        self.calls.append(f"find:{project_id}:{name}")
        for db in self.databases:
            if db.name == name:
                return db
        return None

    def delete_database(self, database_id: str) -> None:
        self.calls.append(f"delete:{database_id}")
        if self.delete_error is not None:
            raise self.delete_error


class _Outputs:
    def __init__(self):
        self.values: dict[str, str] = {}

    def set_output(self, name: str, value: str) -> None:
        self.values[name] = value


class _Reporter:
    def __init__(self):
        self.messages: list[str] = []

    def info(self, msg: str) -> None:
        self.messages.append(msg)

    def warn(self, msg: str) -> None:
        self.messages.append(msg)

    def success(self, msg: str) -> None:
        self.messages.append(msg)


def _operation(inputs, ci=None, provider=None, **kwargs):
    provider = provider or _Provider()
    outputs = _Outputs()
    reporter = _Reporter()
    op = DatabaseCleanupOperation(
        inputs, ci or CIContext(run_number="7"), provider, outputs, reporter, **kwargs
    )
    return op, provider, outputs, reporter


@pytest.mark.parametrize(
    ("token", "project"), [(None, "proj"), ("", "proj"), ("tok", None), ("tok", "  ")]
)
def test_missing_required_inputs_fail_before_any_call(token, project):
    op, provider, outputs, _ = _operation(OperationInputs(token, project))

    with pytest.raises(ConfigurationError, match="service_token and project_id"):
        op.run()

    assert provider.calls == []
    assert outputs.values == {}


def test_delete_by_name_when_found():
    provider = _Provider([DatabaseRecord(id="db_9", name="my_cool_branch")])
    op, provider, outputs, reporter = _operation(
        OperationInputs("tok", "proj", database_name="My-Cool/Branch"), provider=provider
    )

    result = op.run()

    assert provider.calls == ["find:proj:my_cool_branch", "delete:db_9"]
    assert outputs.values == {"deleted": "true", "database_name": "my_cool_branch"}
    assert result.deleted is True
    assert result.target is not None
    assert result.target.strategy == ResolutionStrategy.BY_NAME
    assert "Looking for database to cleanup: my_cool_branch" in reporter.messages


def test_name_derived_from_pull_request():
    ci = CIContext(pr_number=42, branch="feature/x", run_number="7")
    provider = _Provider([DatabaseRecord(id="db_42", name="pr_42_feature_x")])
    op, provider, outputs, _ = _operation(OperationInputs("tok", "proj"), ci, provider)

    op.run()

    assert provider.calls == ["find:proj:pr_42_feature_x", "delete:db_42"]
    assert outputs.values["database_name"] == "pr_42_feature_x"


def test_not_found_reports_false_without_delete():
    op, provider, outputs, reporter = _operation(OperationInputs("tok", "proj"))

    result = op.run()

    assert provider.calls == ["find:proj:test_7"]
    assert outputs.values == {"deleted": "false", "database_name": "test_7"}
    assert result.deleted is False
    assert result.target is None
    assert "No database found with name: test_7" in reporter.messages


def test_first_name_match_wins():
    provider = _Provider(
        [
            DatabaseRecord(id="other", name="test_70"),
            DatabaseRecord(id="first", name="test_7"),
            DatabaseRecord(id="second", name="test_7"),
        ]
    )
    op, provider, _, _ = _operation(OperationInputs("tok", "proj"), provider=provider)

    op.run()

    assert provider.calls[-1] == "delete:first"


def test_id_wins_over_name_and_skips_lookup():
    op, provider, outputs, reporter = _operation(
        OperationInputs("tok", "proj", database_name="ignored", database_id="db_123")
    )

    result = op.run()

    assert provider.calls == ["delete:db_123"]
    assert outputs.values == {"deleted": "true", "database_name": "database-db_123"}
    assert result.target is not None
    assert result.target.strategy == ResolutionStrategy.BY_ID
    assert any("using database_id" in m for m in reporter.messages)


def test_id_without_name_has_no_precedence_notice():
    op, _, _, reporter = _operation(OperationInputs("tok", "proj", database_id="db_1"))

    op.run()

    assert not any("using database_id" in m for m in reporter.messages)


def test_deletion_error_propagates_and_leaves_outputs_unset():
    provider = _Provider(
        [DatabaseRecord(id="db_7", name="test_7")],
        delete_error=DeletionError("Failed to delete database: 500 Internal Server Error - boom"),
    )
    op, _, outputs, _ = _operation(OperationInputs("tok", "proj"), provider=provider)

    with pytest.raises(DeletionError, match="500 Internal Server Error"):
        op.run()

    assert outputs.values == {}


def test_network_error_propagates():
    class _FailingProvider(_Provider):
        def find_database_by_name(self, project_id: str, name: str):
            raise NetworkError("Failed to fetch databases: 503 Service Unavailable")

    op, _, outputs, _ = _operation(OperationInputs("tok", "proj"), provider=_FailingProvider())

    with pytest.raises(NetworkError, match="503"):
        op.run()

    assert outputs.values == {}


def test_dry_run_resolves_but_does_not_delete():
    provider = _Provider([DatabaseRecord(id="db_7", name="test_7")])
    op, provider, outputs, _ = _operation(
        OperationInputs("tok", "proj"), provider=provider, dry_run=True
    )

    result = op.run()

    assert provider.calls == ["find:proj:test_7"]
    assert outputs.values == {"deleted": "false", "database_name": "test_7"}
    assert result.target is not None


def test_declined_confirmation_does_not_delete():
    seen = []

    def _confirm(target):
        seen.append(target.id)
        return False

    op, provider, outputs, _ = _operation(
        OperationInputs("tok", "proj", database_id="db_1"), confirm=_confirm
    )

    op.run()

    assert seen == ["db_1"]
    assert provider.calls == []
    assert outputs.values["deleted"] == "false"
