def test_question_types_and_internal_types(client, ref):
    types = client.get("/api/question-types").json()
    assert {t["typeNameEn"] for t in types} == {"Verbal", "Quantitative"}

    internal = client.get("/api/internal-types", params={"typeId": ref.verbal}).json()
    assert len(internal) == 4
    assert all(t["typeId"] == ref.verbal for t in internal)

    everything = client.get("/api/internal-types").json()
    assert len(everything) > len(internal)


def test_create_internal_type(client, ref):
    response = client.post(
        "/api/internal-types",
        json={"typeId": ref.verbal, "internalName": "المفردة الشاذة", "internalNameEn": "Odd Word"},
    )
    assert response.status_code == 201
    assert response.json()["internalTypeId"] > 0


def test_deleting_referenced_type_returns_conflict(client, ref, question_payload):
    question = client.post("/api/questions", json=question_payload()).json()

    response = client.delete(f"/api/question-types/{ref.verbal}")
    assert response.status_code == 409
    assert response.json()["references"] == [question["qNo"]]

    response = client.delete(f"/api/internal-types/{ref.reading}")
    assert response.status_code == 409

    assert len(client.get("/api/question-types").json()) == 2


def test_record_attempt_updates_question(client, question_payload):
    question = client.post("/api/questions", json=question_payload()).json()

    response = client.post(
        "/api/question-attempts",
        json={
            "qNo": question["qNo"],
            "studentId": "s-1",
            "selectedAnswer": "B",
            "isCorrect": False,
            "timeTakenSeconds": 30,
        },
    )
    assert response.status_code == 201
    attempt = response.json()
    assert attempt["attemptId"] > 0
    assert attempt["isCorrect"] is False

    detail = client.get(f"/api/questions/{question['qNo']}").json()
    assert detail["totalAttempts"] == 1
    assert detail["correctAttempts"] == 0
    assert detail["avgDifficulty"] == 100.0


def test_attempt_validation(client):
    response = client.post(
        "/api/question-attempts",
        json={"qNo": 1, "selectedAnswer": "Z", "isCorrect": True},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid attempt data"

    response = client.post(
        "/api/question-attempts",
        json={"qNo": 5000, "selectedAnswer": "A", "isCorrect": True},
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "qNo"


def test_dashboard_stats(client, question_payload):
    client.post("/api/questions", json=question_payload(status="active"))

    response = client.get("/api/dashboard/stats")

    assert response.status_code == 200
    stats = response.json()
    assert stats["totalQuestions"] == 1
    assert stats["activeQuestions"] == 1
    assert stats["verbalQuestions"] == 1
    assert stats["readingComprehension"] == 1
    assert stats["quantQuestions"] == 0
    assert stats["contextualError"] == 0


def test_health_check(client):
    assert client.get("/").json()["status"] == "ok"
