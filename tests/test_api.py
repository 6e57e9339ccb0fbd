"""Tests for the planning API."""

from fastapi.testclient import TestClient

from macrofit.api.app import (
    GENERATION_FAILED_MESSAGE,
    UNAVAILABLE_MESSAGE,
    create_app,
)
from macrofit.config import Settings
from macrofit.containers import AppContainer
from macrofit.services.meal_plans import PARSE_ERROR_MESSAGE
from tests.conftest import FakeChatClient, sample_meal_plan

PROFILE = {
    "height": 170,
    "weight": 80,
    "age": 30,
    "gender": "male",
    "exercise_frequency": 3,
    "target_weight": 75,
    "goal_setting_method": "duration",
    "target_duration_weeks": 12,
}


def test_health(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_nutrition_report(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/nutrition", json=PROFILE)

    assert response.status_code == 200
    body = response.json()
    assert body["bmr"] == 1717.5
    assert body["tdee"] == 2662
    assert body["targets"]["daily_calories"] == 2204
    assert body["targets"]["daily_protein"] == 165
    assert [meal["name"] for meal in body["meal_calories"]] == [
        "Breakfast",
        "Lunch",
        "Dinner",
    ]
    assert len(body["projection"]["projections"]) == 13
    assert body["projection"]["projections"][-1]["projected_weight"] == 75.0
    assert body["validation"] == {"is_valid": True, "errors": []}


def test_nutrition_rejects_conflicting_goal_fields(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/nutrition", json={**PROFILE, "target_daily_calories": 2000}
    )

    assert response.status_code == 422


def test_nutrition_rejects_bad_macro_split(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/nutrition",
        json={**PROFILE, "macro_split": {"protein": 50, "fat": 30, "carbs": 30}},
    )

    assert response.status_code == 422


def test_validate_goal_reports_identical_weight(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/goals/validate", json={**PROFILE, "target_weight": 80}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["is_valid"] is False
    assert "Target weight is the same as the current weight" in body["errors"]


def test_duration_from_calories(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/goals/duration", json={"profile": PROFILE, "daily_calories": 2204}
    )

    assert response.status_code == 200
    assert response.json() == {"weeks": 12.0}


def test_duration_is_undefined_at_maintenance(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/goals/duration", json={"profile": PROFILE, "daily_calories": 2662}
    )

    assert response.status_code == 400


def test_meal_plan_generation(
    container: AppContainer, chat_client: FakeChatClient
) -> None:
    client = TestClient(create_app(container))

    response = client.post("/api/meal-plan", json=PROFILE)

    assert response.status_code == 200
    body = response.json()
    assert body["meal_plan"]["mealPatterns"]["breakfast"]["name"] == "トーストと卵"
    assert body["shopping_list"]["total_cost"] == 4800
    assert body["nutrition_targets"]["daily_calories"] == 2204
    assert body["meal_targets"]["daily_calories"] == 2204
    assert len(chat_client.requests) == 1


def test_meal_plan_unreadable_reply(
    container: AppContainer, chat_client: FakeChatClient
) -> None:
    chat_client.reply = "sorry"
    client = TestClient(create_app(container))

    response = client.post("/api/meal-plan", json=PROFILE)

    assert response.status_code == 502
    assert response.json() == {"detail": PARSE_ERROR_MESSAGE}


def test_meal_plan_upstream_failure(
    container: AppContainer, chat_client: FakeChatClient
) -> None:
    chat_client.error = RuntimeError("Azure OpenAI returned an empty response")
    client = TestClient(create_app(container))

    response = client.post("/api/meal-plan", json=PROFILE)

    assert response.status_code == 502
    assert response.json() == {"detail": GENERATION_FAILED_MESSAGE}


def test_meal_plan_requires_model_settings(
    container: AppContainer, chat_client: FakeChatClient
) -> None:
    container.settings = Settings(
        azure_openai_endpoint="", azure_openai_api_key="", environment="test"
    )
    client = TestClient(create_app(container))

    response = client.post("/api/meal-plan", json=PROFILE)

    assert response.status_code == 503
    assert response.json() == {"detail": UNAVAILABLE_MESSAGE}
    assert chat_client.requests == []


def test_shopping_list_from_plan(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/api/shopping-list",
        json={"meal_plan": sample_meal_plan(), "protein_intake_frequency": 1},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total_cost"] == 4800 + 280
    assert body["categories"][0]["name"] == "乳製品"
    assert body["categories"][1]["name"] == "主食・穀物"
    assert body["categories"][1]["items"][0] == {
        "name": "食パン",
        "amount": 14,
        "unit": "枚",
        "estimated_price": 350,
        "priority": "high",
    }


def test_shopping_list_skips_non_finite_amounts(container: AppContainer) -> None:
    client = TestClient(create_app(container))
    body = (
        '{"meal_plan": {"mealPatterns": {"breakfast": {"ingredients": ['
        '{"name": "鶏むね肉", "amount": NaN, "unit": "g"},'
        '{"name": "卵", "amount": 2, "unit": "個"}]}}}}'
    )

    response = client.post(
        "/api/shopping-list",
        content=body.encode(),
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json()["total_cost"] == 350
    assert [item["name"] for item in response.json()["categories"][0]["items"]] == [
        "卵"
    ]
