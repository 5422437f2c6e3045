import pytest

from qbank_admin.infrastructure.db.models import Question, QuestionAttempt
from qbank_admin.infrastructure.exceptions import NotFoundError, ValidationFailedError
from qbank_admin.infrastructure.repositories.attempt_repo_impl import create_question_attempt
from qbank_admin.infrastructure.repositories.question_repo_impl import (
    list_questions,
    get_question,
    update_question,
    delete_question,
)
from qbank_admin.presentation.schemas.attempt_schema import QuestionAttemptCreate
from qbank_admin.presentation.schemas.question_schema import (
    QuestionCreate,
    QuestionUpdate,
    split_tags,
)


def test_create_then_get_returns_input_fields(db, ref, make_question):
    data = {
        "question_title": "Rivers",
        "question_text": "Where do rivers end?",
        "question_image": "https://cdn.example.com/q1.png",
        "mc_a": "Sea",
        "mc_b": "Mountain",
        "mc_c": "Desert",
        "mc_d": "Cloud",
        "mc_correct": "A",
        "type_id": ref.verbal,
        "internal_type_id": ref.reading,
        "question_order": 2,
        "explanation_image": "https://cdn.example.com/e1.png",
        "hint_image": None,
        "tags": "geo,rivers",
        "status": "active",
    }
    created = make_question(**data)

    fetched = get_question(db, created.q_no)

    insertable = QuestionCreate(**data).model_dump()
    for field, value in insertable.items():
        assert fetched[field] == value, field
    assert fetched["q_no"] == created.q_no
    assert fetched["created_at"] is not None
    assert fetched["updated_at"] is not None
    assert fetched["total_attempts"] == 0
    assert fetched["correct_attempts"] == 0
    assert float(fetched["avg_difficulty"]) == 0
    assert fetched["type_name"] == "لفظي"
    assert fetched["internal_name"] == "استيعاب المقروء"
    assert fetched["passage_title"] is None


def test_get_missing_question_returns_none(db, ref):
    assert get_question(db, 9999) is None


def test_list_questions_search_and_type_filters(db, ref, make_question):
    verbal_water = make_question(question_text="The water is cold")
    make_question(question_text="Fire is hot")
    quant_water_title = make_question(
        question_title="water tank",
        question_text="Compute the volume",
        type_id=ref.quant,
        internal_type_id=ref.algebra,
    )
    quant_upper = make_question(
        question_text="Water pressure rises",
        type_id=ref.quant,
        internal_type_id=ref.algebra,
    )

    both = list_questions(db, search_term="water", type_filter="لفظي")
    assert [q["q_no"] for q in both] == [verbal_water.q_no]

    search_only = list_questions(db, search_term="water")
    assert {q["q_no"] for q in search_only} == {verbal_water.q_no, quant_water_title.q_no}

    type_only = list_questions(db, type_filter="لفظي")
    assert all(q["type_name"] == "لفظي" for q in type_only)
    assert len(type_only) == 2

    everything = list_questions(db)
    q_nos = [q["q_no"] for q in everything]
    assert q_nos == sorted(q_nos, reverse=True)
    assert q_nos[0] == quant_upper.q_no
    assert len(q_nos) == 4

    assert len(list_questions(db, type_filter="all")) == 4


def test_search_wildcards_are_literal(db, ref, make_question):
    make_question(question_text="Increase by 50%")
    make_question(question_text="Increase by fifty")

    results = list_questions(db, search_term="%")
    assert [q["question_text"] for q in results] == ["Increase by 50%"]


def test_list_questions_limit_and_offset(db, ref, make_question):
    created = [make_question(question_text=f"Question {i}") for i in range(5)]
    newest_first = [q.q_no for q in reversed(created)]

    page = list_questions(db, limit=2, offset=1)
    assert [q["q_no"] for q in page] == newest_first[1:3]


def test_partial_update_changes_only_given_fields(db, ref, make_question):
    question = make_question(tags="a,b")
    before = get_question(db, question.q_no)

    update_question(db, question.q_no, QuestionUpdate(status="active"))
    after = get_question(db, question.q_no)

    assert after["status"] == "active"
    for field in before:
        if field in ("status", "updated_at"):
            continue
        assert after[field] == before[field], field


def test_update_and_delete_missing_question_raise_not_found(db, ref):
    with pytest.raises(NotFoundError):
        update_question(db, 404, QuestionUpdate(status="active"))
    with pytest.raises(NotFoundError):
        delete_question(db, 404)


def test_internal_type_must_belong_to_question_type(db, ref, make_question):
    with pytest.raises(ValidationFailedError) as exc_info:
        make_question(type_id=ref.quant, internal_type_id=ref.reading)
    assert exc_info.value.errors[0]["field"] == "internalTypeId"
    assert db.query(Question).count() == 0


def test_update_checks_merged_type_references(db, ref, make_question):
    question = make_question()

    with pytest.raises(ValidationFailedError):
        update_question(db, question.q_no, QuestionUpdate(type_id=ref.quant))

    updated = update_question(
        db, question.q_no, QuestionUpdate(type_id=ref.quant, internal_type_id=ref.algebra)
    )
    assert updated.type_id == ref.quant


def test_unknown_references_are_reported_per_field(db, ref, make_question):
    with pytest.raises(ValidationFailedError) as exc_info:
        make_question(type_id=999, internal_type_id=998, passage_id=997)
    fields = {e["field"] for e in exc_info.value.errors}
    assert fields == {"typeId", "internalTypeId", "passageId"}


def test_tags_round_trip(db, ref, make_question):
    question = make_question(tags=" grammar , ,vocab,  reading ")
    fetched = get_question(db, question.q_no)
    assert split_tags(fetched["tags"]) == ["grammar", "vocab", "reading"]


def test_delete_question_removes_its_attempts(db, ref, make_question):
    question = make_question()
    create_question_attempt(
        db, QuestionAttemptCreate(q_no=question.q_no, selected_answer="A", is_correct=False)
    )

    delete_question(db, question.q_no)

    assert get_question(db, question.q_no) is None
    assert db.query(QuestionAttempt).count() == 0
