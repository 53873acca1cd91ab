"""Tests for PolicyEngine."""

from unittest.mock import AsyncMock

import pytest

from pass_authz.features.policy import PolicyEngine, Submission, SubmissionStatus

URI = "http://repo.example.org/fcrepo/rest/submissions/1"
BACKEND = "role:backend"
ADMIN = "role:admin"
SUBMITTER_ROLE = "role:submitter"
SUBMITTER = "http://repo.example.org/fcrepo/rest/users/s"
PREPARER_1 = "http://repo.example.org/fcrepo/rest/users/p1"
PREPARER_2 = "http://repo.example.org/fcrepo/rest/users/p2"


@pytest.fixture
def reader():
    reader = AsyncMock()
    reader.read_resource.return_value = Submission()
    return reader


@pytest.fixture
def engine(reader, mock_acl_manager):
    return PolicyEngine(
        reader, mock_acl_manager,
        backend_role=BACKEND, admin_role=ADMIN, submitter_role=SUBMITTER_ROLE
    )


@pytest.fixture
def bare_engine(reader, mock_acl_manager):
    """Engine without any foundational roles configured."""
    return PolicyEngine(reader, mock_acl_manager)


class TestSubmissionPolicy:
    """Test suite for submission permissions."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("submission", [
        Submission(submission_status=SubmissionStatus.SUBMITTED, submitter=SUBMITTER),
        Submission(submission_status=SubmissionStatus.CANCELLED, submitter=SUBMITTER),
        Submission(submitted=True, submitter=SUBMITTER, preparers=[PREPARER_1]),
    ])
    async def test_frozen_submission(self, engine, reader, mock_acl_manager, mock_builder, submission):
        reader.read_resource.return_value = submission

        acl = await engine.update_submission(URI)

        assert acl == mock_builder.perform.return_value
        reader.read_resource.assert_awaited_once_with(URI, Submission)
        mock_acl_manager.set_permissions.assert_called_once_with(URI)
        mock_builder.grant_read.assert_called_once_with({BACKEND, ADMIN, SUBMITTER_ROLE})
        mock_builder.grant_write.assert_called_once_with({BACKEND})
        mock_builder.perform.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_frozen_submission_without_roles(self, bare_engine, reader, mock_builder):
        reader.read_resource.return_value = Submission(submitted=True, submitter=SUBMITTER)

        await bare_engine.update_submission(URI)

        mock_builder.grant_read.assert_called_once_with(set())
        mock_builder.grant_write.assert_called_once_with(set())

    @pytest.mark.asyncio
    async def test_open_submission_submitter_can_write(self, engine, reader, mock_builder):
        reader.read_resource.return_value = Submission(
            submission_status=SubmissionStatus.APPROVAL_REQUESTED, submitter=SUBMITTER
        )

        await engine.update_submission(URI)

        mock_builder.grant_read.assert_called_once_with({BACKEND, ADMIN, SUBMITTER_ROLE})
        mock_builder.grant_write.assert_called_once_with({BACKEND, SUBMITTER})

    @pytest.mark.asyncio
    async def test_open_submission_preparers_can_write(self, engine, reader, mock_builder):
        reader.read_resource.return_value = Submission(
            submitted=False, preparers=[PREPARER_1, PREPARER_2]
        )

        await engine.update_submission(URI)

        mock_builder.grant_write.assert_called_once_with({BACKEND, PREPARER_1, PREPARER_2})

    @pytest.mark.asyncio
    async def test_submission_without_status(self, engine, reader, mock_builder):
        reader.read_resource.return_value = Submission(submitter=SUBMITTER)

        await engine.update_submission(URI)

        mock_builder.grant_write.assert_called_once_with({BACKEND, SUBMITTER})

    @pytest.mark.asyncio
    async def test_status_wins_over_legacy_flag(self, engine, reader, mock_builder):
        reader.read_resource.return_value = Submission(
            submitted=True,
            submission_status=SubmissionStatus.CHANGES_REQUESTED,
            submitter=SUBMITTER,
        )

        await engine.update_submission(URI)

        mock_builder.grant_write.assert_called_once_with({BACKEND, SUBMITTER})

    @pytest.mark.asyncio
    async def test_read_errors_propagate(self, engine, reader, mock_acl_manager):
        reader.read_resource.side_effect = RuntimeError("unreachable")

        with pytest.raises(RuntimeError):
            await engine.update_submission(URI)

        mock_acl_manager.set_permissions.assert_not_called()


class TestSubmissionEventPolicy:
    """Test suite for submission event permissions."""

    @pytest.mark.asyncio
    async def test_event_is_read_only(self, engine, reader, mock_acl_manager, mock_builder):
        await engine.update_submission_event(URI)

        mock_acl_manager.set_permissions.assert_called_once_with(URI)
        mock_builder.grant_read.assert_called_once_with({BACKEND, ADMIN, SUBMITTER_ROLE})
        mock_builder.grant_write.assert_not_called()
        mock_builder.perform.assert_awaited_once()
        reader.read_resource.assert_not_called()

    @pytest.mark.asyncio
    async def test_event_without_roles(self, bare_engine, mock_builder):
        await bare_engine.update_submission_event(URI)

        mock_builder.grant_read.assert_called_once_with(set())


class TestFoundationalRoles:
    """Test suite for role configuration."""

    def test_unset_roles_are_dropped(self, reader, mock_acl_manager):
        engine = PolicyEngine(reader, mock_acl_manager, backend_role=BACKEND, admin_role="")

        assert engine.foundational_roles() == {BACKEND}
