import pytest

from qbank_admin.infrastructure.db.models import InternalType, Question, QuestionType
from qbank_admin.infrastructure.exceptions import (
    ConstraintViolationError,
    NotFoundError,
    ValidationFailedError,
)
from qbank_admin.infrastructure.repositories.type_repo_impl import (
    list_question_types,
    create_question_type,
    delete_question_type,
    list_internal_types,
    create_internal_type,
    delete_internal_type,
)
from qbank_admin.presentation.schemas.type_schema import QuestionTypeCreate, InternalTypeCreate


def test_question_types_are_ordered_by_name(db, ref):
    names = [t.type_name for t in list_question_types(db)]
    assert names == sorted(names)
    assert set(names) == {"لفظي", "كمي"}


def test_internal_types_can_be_filtered_by_parent(db, ref):
    verbal = list_internal_types(db, ref.verbal)
    names = [t.internal_name for t in verbal]

    assert names == sorted(names)
    assert len(names) == 4
    assert all(t.type_id == ref.verbal for t in verbal)
    assert len(list_internal_types(db)) == db.query(InternalType).count()


def test_duplicate_question_type_is_rejected(db, ref):
    with pytest.raises(ValidationFailedError):
        create_question_type(db, QuestionTypeCreate(type_name="لفظي", type_name_en="Verbal 2"))


def test_internal_type_needs_existing_parent(db, ref):
    with pytest.raises(ValidationFailedError) as exc_info:
        create_internal_type(
            db, InternalTypeCreate(type_id=999, internal_name="x", internal_name_en="x")
        )
    assert exc_info.value.errors[0]["field"] == "typeId"


def test_deleting_referenced_question_type_is_rejected(db, ref, make_question):
    question = make_question()
    type_count = db.query(QuestionType).count()
    internal_count = db.query(InternalType).count()

    with pytest.raises(ConstraintViolationError) as exc_info:
        delete_question_type(db, ref.verbal)

    assert exc_info.value.references == [question.q_no]
    assert db.query(QuestionType).count() == type_count
    assert db.query(InternalType).count() == internal_count
    assert db.query(Question).count() == 1


def test_deleting_referenced_internal_type_is_rejected(db, ref, make_question):
    question = make_question()

    with pytest.raises(ConstraintViolationError) as exc_info:
        delete_internal_type(db, ref.reading)

    assert exc_info.value.references == [question.q_no]
    assert db.get(InternalType, ref.reading) is not None


def test_unreferenced_types_can_be_deleted(db, ref):
    delete_internal_type(db, ref.contextual)
    assert db.get(InternalType, ref.contextual) is None

    delete_question_type(db, ref.quant)
    assert db.get(QuestionType, ref.quant) is None
    assert list_internal_types(db, ref.quant) == []

    with pytest.raises(NotFoundError):
        delete_question_type(db, ref.quant)
