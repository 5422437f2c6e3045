import pytest
from pydantic import ValidationError

from qbank_admin.presentation.schemas.passage_schema import PassageUpdate
from qbank_admin.presentation.schemas.question_schema import (
    QuestionCreate,
    QuestionOut,
    QuestionUpdate,
    normalize_tags,
    split_tags,
)


def _base(**overrides):
    data = {
        "questionText": "Q",
        "mcA": "a",
        "mcB": "b",
        "mcC": "c",
        "mcD": "d",
        "mcCorrect": "a",
        "typeId": "1",
        "internalTypeId": 2,
    }
    data.update(overrides)
    return data


def test_create_coerces_ids_and_letters():
    question = QuestionCreate(**_base())
    assert question.type_id == 1
    assert question.mc_correct == "A"
    assert question.status == "draft"
    assert question.question_order == 1


def test_blank_required_text_is_rejected():
    with pytest.raises(ValidationError):
        QuestionCreate(**_base(mcB="   "))


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("a, b ,c", "a,b,c"),
        (["x", " ", "y "], "x,y"),
        (" , ", None),
        (None, None),
    ],
)
def test_normalize_tags(raw, expected):
    assert normalize_tags(raw) == expected


def test_split_tags_reverses_normalization():
    assert split_tags(normalize_tags("one, two,,three")) == ["one", "two", "three"]
    assert split_tags(None) == []


def test_update_tracks_only_sent_fields():
    update = QuestionUpdate(**{"status": "inactive"})
    assert update.model_dump(exclude_unset=True) == {"status": "inactive"}


def test_update_cannot_clear_required_fields():
    with pytest.raises(ValidationError) as exc_info:
        QuestionUpdate(**{"mcCorrect": None})
    assert exc_info.value.errors()[0]["loc"] == ("mcCorrect",)
    # optional fields may be cleared
    assert QuestionUpdate(**{"questionTitle": None}).model_dump(exclude_unset=True) == {
        "question_title": None
    }


def test_passage_update_cannot_clear_image():
    with pytest.raises(ValidationError) as exc_info:
        PassageUpdate(**{"passageImage": None})
    assert exc_info.value.errors()[0]["loc"] == ("passageImage",)
    assert PassageUpdate(**{"passageTitle": None}).model_dump(exclude_unset=True) == {
        "passage_title": None
    }


def test_question_output_lists_tags():
    question = QuestionOut(
        q_no=1,
        question_text="Q",
        mc_a="a",
        mc_b="b",
        mc_c="c",
        mc_d="d",
        mc_correct="A",
        type_id=1,
        internal_type_id=2,
        tags="grammar,vocab",
        status="draft",
    )
    assert question.model_dump(by_alias=True)["tagList"] == ["grammar", "vocab"]
