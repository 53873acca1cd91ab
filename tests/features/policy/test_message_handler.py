"""Tests for repository event parsing and routing."""

import json
import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from pass_authz.core.exceptions import MessageFormatError
from pass_authz.features.policy import (
    SUBMISSION_EVENT_TYPE,
    SUBMISSION_TYPE,
    AuthzMessageHandler,
    RepositoryAction,
    RepositoryEvent,
)
from pass_authz.features.policy.services.message_handler import (
    CREATION,
    DELETION,
    MODIFICATION,
)

URI = "http://repo.example.org/fcrepo/rest/submissions/1"


def message(types, actions, uri=URI):
    return json.dumps({
        "id": uri,
        "type": types,
        "wasGeneratedBy": {"type": actions},
    })


@pytest.fixture
def engine():
    engine = MagicMock()
    engine.update_submission = AsyncMock(return_value=URI + "-acl")
    engine.update_submission_event = AsyncMock(return_value=URI + "-event-acl")
    return engine


@pytest.fixture
def handler(engine):
    return AuthzMessageHandler(engine)


class TestRepositoryEvent:
    """Test suite for RepositoryEvent.from_json."""

    def test_creation(self):
        event = RepositoryEvent.from_json(message([SUBMISSION_TYPE], [CREATION]))

        assert event.resource_uri == URI
        assert event.resource_types == [SUBMISSION_TYPE]
        assert event.action is RepositoryAction.CREATED

    def test_single_values(self):
        event = RepositoryEvent.from_json(message(SUBMISSION_TYPE, MODIFICATION))

        assert event.resource_types == [SUBMISSION_TYPE]
        assert event.action is RepositoryAction.MODIFIED

    @pytest.mark.parametrize("actions,expected", [
        ([MODIFICATION, CREATION], RepositoryAction.CREATED),
        ([MODIFICATION, DELETION], RepositoryAction.DELETED),
        ([CREATION, DELETION], RepositoryAction.CREATED),
        (["http://example.org/Other"], None),
        ([], None),
    ])
    def test_action_precedence(self, actions, expected):
        assert RepositoryEvent.from_json(message([], actions)).action is expected

    def test_scalar_type(self):
        event = RepositoryEvent.from_json(json.dumps({"id": URI, "type": 5}))

        assert event.resource_types == ["5"]

    def test_missing_generated_by(self):
        event = RepositoryEvent.from_json(json.dumps({"id": URI}))

        assert event.action is None
        assert event.resource_types == []

    @pytest.mark.parametrize("text", [
        "not json",
        json.dumps([URI]),
        json.dumps({"type": [SUBMISSION_TYPE]}),
        json.dumps({"id": URI, "wasGeneratedBy": [CREATION]}),
        json.dumps({"id": 42, "type": [SUBMISSION_TYPE]}),
        json.dumps({"id": {"@id": URI}}),
    ])
    def test_malformed_messages(self, text):
        with pytest.raises(MessageFormatError):
            RepositoryEvent.from_json(text)


class TestAuthzMessageHandler:
    """Test suite for AuthzMessageHandler."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action", [CREATION, MODIFICATION])
    async def test_submission(self, handler, engine, action):
        result = await handler.handle_json(message([SUBMISSION_TYPE], [action]))

        assert result == URI + "-acl"
        engine.update_submission.assert_awaited_once_with(URI)
        engine.update_submission_event.assert_not_called()

    @pytest.mark.asyncio
    async def test_submission_event(self, handler, engine):
        result = await handler.handle_json(message([SUBMISSION_EVENT_TYPE], [CREATION]))

        assert result == URI + "-event-acl"
        engine.update_submission_event.assert_awaited_once_with(URI)
        engine.update_submission.assert_not_called()

    @pytest.mark.asyncio
    async def test_deletion_is_ignored(self, handler, engine):
        assert await handler.handle_json(message([SUBMISSION_TYPE], [DELETION])) is None

        engine.update_submission.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_action_is_ignored(self, handler, engine):
        assert await handler.handle_json(message([SUBMISSION_TYPE], [])) is None

        engine.update_submission.assert_not_called()

    @pytest.mark.asyncio
    async def test_irrelevant_type_is_ignored(self, handler, engine):
        text = message(["http://oapass.org/ns/pass#Grant"], [CREATION])

        assert await handler.handle_json(text) is None

        engine.update_submission.assert_not_called()
        engine.update_submission_event.assert_not_called()

    @pytest.mark.asyncio
    async def test_errors_are_logged_and_raised(self, handler, engine, caplog):
        engine.update_submission.side_effect = RuntimeError("repository down")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError):
                await handler.handle(RepositoryEvent(
                    resource_uri=URI,
                    resource_types=[SUBMISSION_TYPE],
                    action=RepositoryAction.MODIFIED,
                ))

        assert "update_submission" in caplog.text
        assert URI in caplog.text

    @pytest.mark.asyncio
    async def test_malformed_message_raises(self, handler, engine):
        with pytest.raises(MessageFormatError):
            await handler.handle_json("{")

        engine.update_submission.assert_not_called()
