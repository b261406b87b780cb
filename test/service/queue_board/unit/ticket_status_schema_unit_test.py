import pytest

from src.platform.exception.exceptions import InvalidStatusError
from src.service.queue_board.domain.enum.ticket_status import (
    THREE_STAGE_SCHEMA,
    TWO_STAGE_SCHEMA,
    TicketStatus,
    get_status_schema,
)


@pytest.mark.unit
class TestTwoStageSchema:
    def test_initial_status_is_waiting(self):
        assert TWO_STAGE_SCHEMA.initial == TicketStatus.WAITING

    @pytest.mark.parametrize('value', ['waiting', 'called'])
    def test_accepts_its_statuses(self, value):
        assert TWO_STAGE_SCHEMA.validate(value) == TicketStatus(value)

    @pytest.mark.parametrize('value', ['calling', 'serving'])
    def test_superseded_status_names_replacements(self, value):
        # When: a value from the three-stage workflow arrives
        with pytest.raises(InvalidStatusError) as exc_info:
            TWO_STAGE_SCHEMA.validate(value)

        # Then: the message says it is no longer supported and lists the valid ones
        message = exc_info.value.message
        assert f'The status "{value}" is no longer supported' in message
        assert '"waiting" or "called"' in message
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize('value', ['done', '', None, 'WAITING'])
    def test_unknown_status_lists_allowed_values(self, value):
        with pytest.raises(InvalidStatusError) as exc_info:
            TWO_STAGE_SCHEMA.validate(value)

        assert 'Must be one of: waiting, called' in exc_info.value.message

    def test_membership(self):
        assert TicketStatus.CALLED in TWO_STAGE_SCHEMA
        assert TicketStatus.SERVING not in TWO_STAGE_SCHEMA


@pytest.mark.unit
class TestThreeStageSchema:
    def test_statuses_in_workflow_order(self):
        assert THREE_STAGE_SCHEMA.statuses == (
            TicketStatus.WAITING,
            TicketStatus.CALLING,
            TicketStatus.SERVING,
        )

    def test_rejects_called(self):
        with pytest.raises(InvalidStatusError, match='Must be one of: waiting, calling, serving'):
            THREE_STAGE_SCHEMA.validate('called')


@pytest.mark.unit
class TestGetStatusSchema:
    def test_lookup_by_version(self):
        assert get_status_schema('v1') is THREE_STAGE_SCHEMA
        assert get_status_schema('v2') is TWO_STAGE_SCHEMA

    def test_unknown_version(self):
        with pytest.raises(ValueError, match='Unknown ticket status schema: v3'):
            get_status_schema('v3')
