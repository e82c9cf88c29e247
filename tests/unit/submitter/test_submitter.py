"""Unit tests for patch building and the Submitter."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from adosync.client import UnexpectedShapeError
from adosync.submitter import (
    NoChangesError,
    PatchDocument,
    PatchOperation,
    Submitter,
    build_create_patch,
    build_update_patch,
)
from adosync.tickets import WorkItemField


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock DevOpsClient."""
    client = MagicMock()
    client.create_work_item = AsyncMock(return_value={"id": 42, "rev": 1})
    client.update_work_item = AsyncMock(return_value={"id": 7, "rev": 4})
    return client


@pytest.fixture
def submitter(mock_client: MagicMock) -> Submitter:
    """Create a Submitter with a mocked client."""
    return Submitter(mock_client)


@pytest.mark.unit
class TestBuildCreatePatch:
    """Tests for build_create_patch."""

    def test_four_add_operations(self) -> None:
        """Title, description, assignee and points, in that order."""
        patch = build_create_patch("X", "<b>d</b>", 3.0, "jane")

        assert patch.to_json() == [
            {"op": "add", "path": "/fields/System.Title", "value": "X"},
            {"op": "add", "path": "/fields/System.Description", "value": "<b>d</b>"},
            {"op": "add", "path": "/fields/System.AssignedTo", "value": "jane"},
            {
                "op": "add",
                "path": "/fields/Microsoft.VSTS.Scheduling.StoryPoints",
                "value": 3.0,
            },
        ]


@pytest.mark.unit
class TestBuildUpdatePatch:
    """Tests for build_update_patch."""

    def test_one_add_per_field(self) -> None:
        """Each change becomes an add at its field path."""
        patch = build_update_patch({WorkItemField.TITLE: "New", "System.State": "Active"})

        assert patch.to_json() == [
            {"op": "add", "path": "/fields/System.Title", "value": "New"},
            {"op": "add", "path": "/fields/System.State", "value": "Active"},
        ]

    def test_revision_precondition(self) -> None:
        """An expected revision adds a leading test on /rev."""
        patch = build_update_patch({"System.Title": "New"}, expected_revision=6)

        assert patch.to_json()[0] == {"op": "test", "path": "/rev", "value": 6}
        assert len(patch) == 2

    def test_no_precondition_by_default(self) -> None:
        """Without a revision the update is last-writer-wins."""
        patch = build_update_patch({"System.Title": "New"})

        assert all(op["op"] == "add" for op in patch.to_json())

    def test_empty_changes_rejected(self) -> None:
        """Nothing to change raises NoChangesError."""
        with pytest.raises(NoChangesError):
            build_update_patch({})

    def test_unknown_op_rejected(self) -> None:
        """Patch operations validate their op."""
        with pytest.raises(ValidationError):
            PatchOperation(op="move", path="/fields/System.Title")

    def test_empty_document_serializes_to_list(self) -> None:
        """An empty document is still a JSON array."""
        assert PatchDocument().to_json() == []


@pytest.mark.unit
class TestSubmitCreate:
    """Tests for Submitter.submit_create."""

    @pytest.mark.asyncio
    async def test_returns_new_id(self, submitter: Submitter, mock_client: MagicMock) -> None:
        """Returns the id from the response."""
        ticket_id = await submitter.submit_create("Bug", "X", "Some *text*", 2, "jane")

        assert ticket_id == 42
        work_item_type, patch = mock_client.create_work_item.call_args.args
        assert work_item_type == "Bug"
        assert patch.to_json()[1]["value"] == "Some <em>text</em>"

    @pytest.mark.asyncio
    async def test_missing_id_is_unexpected_shape(
        self, submitter: Submitter, mock_client: MagicMock
    ) -> None:
        """A response without an id raises UnexpectedShapeError with the payload."""
        mock_client.create_work_item.return_value = {}

        with pytest.raises(UnexpectedShapeError) as exc_info:
            await submitter.submit_create("Bug", "X", "", None, "jane")

        assert exc_info.value.payload == {}


@pytest.mark.unit
class TestSubmitUpdate:
    """Tests for Submitter.submit_update."""

    @pytest.mark.asyncio
    async def test_returns_new_revision(
        self, submitter: Submitter, mock_client: MagicMock
    ) -> None:
        """Returns rev from the response."""
        revision = await submitter.submit_update(7, {WorkItemField.TITLE: "New"})

        assert revision == 4
        ticket_id, _patch = mock_client.update_work_item.call_args.args
        assert ticket_id == 7

    @pytest.mark.asyncio
    async def test_rich_text_converted(
        self, submitter: Submitter, mock_client: MagicMock
    ) -> None:
        """Description and acceptance criteria go out as HTML."""
        await submitter.submit_update(
            7,
            {
                WorkItemField.DESCRIPTION: "**bold**",
                WorkItemField.ACCEPTANCE_CRITERIA: "- done",
                WorkItemField.TITLE: "*not converted*",
            },
        )

        _ticket_id, patch = mock_client.update_work_item.call_args.args
        values = {op["path"]: op["value"] for op in patch.to_json()}
        assert values["/fields/System.Description"] == "<strong>bold</strong>"
        assert "<li>done</li>" in values["/fields/Microsoft.VSTS.Common.AcceptanceCriteria"]
        assert values["/fields/System.Title"] == "*not converted*"

    @pytest.mark.asyncio
    async def test_expected_revision_forwarded(
        self, submitter: Submitter, mock_client: MagicMock
    ) -> None:
        """The revision precondition reaches the patch."""
        await submitter.submit_update(7, {"System.Title": "New"}, expected_revision=3)

        _ticket_id, patch = mock_client.update_work_item.call_args.args
        assert patch.to_json()[0] == {"op": "test", "path": "/rev", "value": 3}

    @pytest.mark.asyncio
    async def test_missing_revision_is_unexpected_shape(
        self, submitter: Submitter, mock_client: MagicMock
    ) -> None:
        """A response without rev raises UnexpectedShapeError."""
        mock_client.update_work_item.return_value = {"id": 7}

        with pytest.raises(UnexpectedShapeError):
            await submitter.submit_update(7, {"System.Title": "New"})
