import pytest

from domain.common.exceptions import (
    DisputeNotFoundException,
    DocumentNotFoundException,
    EvidenceNotFoundException,
    InvalidArgumentException,
    ResourceNotFoundException,
)


BLANK_IDS = ["", "   ", "\t\n"]


@pytest.mark.parametrize("blank", BLANK_IDS)
@pytest.mark.parametrize(
    "call",
    [
        lambda gw, i: gw.accept(i),
        lambda gw, i: gw.finalize(i),
        lambda gw, i: gw.find(i),
        lambda gw, i: gw.add_text_evidence(i, "some text"),
        lambda gw, i: gw.add_file_evidence(i, "doc_1"),
    ],
    ids=["accept", "finalize", "find", "add_text_evidence", "add_file_evidence"],
)
def test_blank_dispute_id_fails_before_transport(gateway, transport, call, blank):
    with pytest.raises(DisputeNotFoundException) as exc_info:
        call(gateway, blank)
    assert f'dispute with id "{blank}" not found' == exc_info.value.message
    assert transport.calls == []


def test_blank_document_id_names_the_document(gateway, transport):
    with pytest.raises(DocumentNotFoundException) as exc_info:
        gateway.add_file_evidence("dispute_1", " ")
    assert exc_info.value.message == 'document with id " " not found'
    assert isinstance(exc_info.value, ResourceNotFoundException)
    assert transport.calls == []


def test_remove_evidence_blank_evidence_id_names_both_ids(gateway, transport):
    with pytest.raises(EvidenceNotFoundException) as exc_info:
        gateway.remove_evidence("dispute_1", "")
    message = exc_info.value.message
    assert "dispute_1" in message
    assert message == 'evidence with id "" for dispute with id "dispute_1" not found'
    assert exc_info.value.details == {"dispute_id": "dispute_1", "evidence_id": ""}
    assert transport.calls == []


def test_remove_evidence_blank_dispute_id(gateway, transport):
    with pytest.raises(EvidenceNotFoundException) as exc_info:
        gateway.remove_evidence("  ", "evidence_1")
    assert "evidence_1" in exc_info.value.message
    assert transport.calls == []


def test_blank_text_evidence_is_invalid_argument(gateway, transport):
    with pytest.raises(InvalidArgumentException) as exc_info:
        gateway.add_text_evidence("dispute_1", "")
    assert not isinstance(exc_info.value, ResourceNotFoundException)
    assert exc_info.value.message == "content cannot be blank"
    assert exc_info.value.field == "content"
    assert transport.calls == []


def test_blank_content_checked_before_blank_id(gateway, transport):
    with pytest.raises(InvalidArgumentException):
        gateway.add_text_evidence("", "   ")
    assert transport.calls == []


def test_none_id_is_treated_as_blank(gateway, transport):
    with pytest.raises(DisputeNotFoundException):
        gateway.find(None)
    assert transport.calls == []
