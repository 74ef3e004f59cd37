import copy
import uuid

import pytest

from career_guidance.seed import SAMPLE_CAREER_PATHS, build_career_path


def variant(base_title, **overrides):
    data = copy.deepcopy(next(d for d in SAMPLE_CAREER_PATHS if d["title"] == base_title))
    growth = overrides.pop("market_demand", None)
    if growth:
        data["growth_prospects"]["market_demand"] = growth
    data.update(overrides)
    return build_career_path(data)


@pytest.fixture
async def catalog(session_factory, career_paths):
    """The sample paths plus one medium-demand path and one retired path."""
    lab = variant(
        "Data Scientist",
        title="Clinical Lab Analyst",
        description="Run diagnostic tests and report results for hospitals.",
        industry="healthcare",
        category="scientific",
        market_demand="medium",
    )
    retired = variant("Software Engineer", title="Mainframe Operator", is_active=False)
    async with session_factory() as session:
        session.add_all([lab, retired])
        await session.commit()
    by_title = {p.title: p for p in career_paths}
    by_title[lab.title] = lab
    by_title[retired.title] = retired
    return by_title


# ---------- TESTS FOR LISTING ----------

async def test_list_puts_high_demand_first(client, catalog):
    response = await client.get("/api/career/paths")

    assert response.status_code == 200
    body = response.json()
    titles = [p["title"] for p in body["career_paths"]]
    assert len(titles) == 4
    assert titles[-1] == "Clinical Lab Analyst"
    assert "Mainframe Operator" not in titles
    assert body["pagination"] == {"current": 1, "pages": 1, "total": 4}


async def test_list_paginates(client, catalog):
    response = await client.get("/api/career/paths", params={"page": 2, "limit": 3})

    body = response.json()
    assert [p["title"] for p in body["career_paths"]] == ["Clinical Lab Analyst"]
    assert body["pagination"] == {"current": 2, "pages": 2, "total": 4}


async def test_list_filters(client, catalog):
    response = await client.get(
        "/api/career/paths", params={"industry": "technology", "market_demand": "high"}
    )

    summaries = response.json()["career_paths"]
    assert sorted(p["title"] for p in summaries) == ["Data Scientist", "Software Engineer"]
    software = next(p for p in summaries if p["title"] == "Software Engineer")
    assert software["entry_level_salary"] == {"min": 300000, "max": 600000, "currency": "INR"}
    assert software["education_required"] == "bachelor"
    assert software["top_skills"][0] == "Programming Languages"
    assert len(software["top_skills"]) == 5


async def test_list_rejects_bad_page(client):
    response = await client.get("/api/career/paths", params={"page": 0})
    assert response.status_code == 400


# ---------- TESTS FOR DETAIL AND SEARCH ----------

async def test_detail_of_active_path(client, catalog):
    career_id = catalog["Data Scientist"].id

    response = await client.get(f"/api/career/paths/{career_id}")

    assert response.status_code == 200
    detail = response.json()["career_path"]
    assert detail["title"] == "Data Scientist"
    assert detail["skills"]["technical"][0]["skill"] == "Python Programming"


@pytest.mark.parametrize("title", ["Mainframe Operator", None])
async def test_detail_of_missing_path(client, catalog, title):
    career_id = catalog[title].id if title else uuid.uuid4()

    response = await client.get(f"/api/career/paths/{career_id}")

    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Career path not found"


async def test_search_matches_title(client, catalog):
    response = await client.get("/api/career/search", params={"q": " scientist "})

    body = response.json()
    assert response.status_code == 200
    assert body["query"] == "scientist"
    assert [p["title"] for p in body["career_paths"]] == ["Data Scientist"]


async def test_search_matches_description(client, catalog):
    response = await client.get("/api/career/search", params={"q": "hospitals"})
    assert [p["title"] for p in response.json()["career_paths"]] == ["Clinical Lab Analyst"]


async def test_search_needs_two_characters(client, catalog):
    response = await client.get("/api/career/search", params={"q": "a"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"


@pytest.mark.parametrize("term", ["%%", "_ata scientist"])
async def test_search_treats_wildcards_literally(client, catalog, term):
    """LIKE wildcards in the query match only themselves."""
    response = await client.get("/api/career/search", params={"q": term})

    body = response.json()
    assert response.status_code == 200
    assert body["career_paths"] == []
    assert body["pagination"]["total"] == 0


# ---------- TESTS FOR STATS AND COMPARE ----------

async def test_stats_cover_active_paths(client, catalog):
    response = await client.get("/api/career/stats")

    body = response.json()
    assert body["total_careers"] == 4
    technology = next(s for s in body["industry_stats"] if s["industry"] == "technology")
    assert technology["count"] == 2
    assert technology["avg_salary"] == 350000
    assert {s["market_demand"]: s["count"] for s in body["market_demand_stats"]} == {"high": 3, "medium": 1}


async def test_compare_keeps_requested_order(client, auth_headers, catalog):
    ids = [str(catalog["Digital Marketing Specialist"].id), str(catalog["Software Engineer"].id)]

    response = await client.post("/api/career/compare", json={"career_ids": ids}, headers=auth_headers)

    assert response.status_code == 200
    comparison = response.json()["comparison"]
    assert [c["id"] for c in comparison["careers"]] == ids
    assert comparison["comparison"]["salary_range"] == {"min": 250000, "max": 600000}
    assert comparison["comparison"]["market_demand"] == [
        {"career": "Digital Marketing Specialist", "demand": "high"},
        {"career": "Software Engineer", "demand": "high"},
    ]


async def test_compare_needs_two_ids(client, auth_headers, catalog):
    response = await client.post(
        "/api/career/compare",
        json={"career_ids": [str(catalog["Software Engineer"].id)]},
        headers=auth_headers,
    )
    assert response.status_code == 400


async def test_compare_with_unknown_id(client, auth_headers, catalog):
    ids = [str(catalog["Software Engineer"].id), str(uuid.uuid4())]

    response = await client.post("/api/career/compare", json={"career_ids": ids}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "One or more career paths not found"


# ---------- TESTS FOR AI-BACKED ENDPOINTS ----------

async def complete_skills_assessment(client, headers):
    started = await client.post("/api/assessment/start", json={"type": "skills"}, headers=headers)
    assessment_id = started.json()["assessment"]["id"]
    for question_id in ("s1", "s2"):
        await client.post(
            f"/api/assessment/{assessment_id}/response",
            json={"question_id": question_id, "answer": 5},
            headers=headers,
        )
    await client.post(f"/api/assessment/{assessment_id}/complete", headers=headers)


async def test_recommendations_need_an_assessment(client, auth_headers):
    response = await client.get("/api/career/recommendations", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "state_conflict"


async def test_recommendations_fall_back_without_model(client, auth_headers):
    await complete_skills_assessment(client, auth_headers)

    response = await client.get("/api/career/recommendations", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["degraded"] is True
    assert [r["career"] for r in body["recommendations"]] == ["Software Developer", "Data Analyst"]
    assert body["profile_summary"]["personality_type"] == "Analytical"


async def test_market_insights_default_to_profile_location(client, auth_headers):
    response = await client.get(
        "/api/career/market-insights", params={"industry": "technology"}, headers=auth_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["location"] == "Bengaluru, Karnataka"
    assert body["insights"]["degraded"] is True


async def test_market_insights_need_industry(client, auth_headers):
    response = await client.get("/api/career/market-insights", headers=auth_headers)
    assert response.status_code == 400


async def test_learning_for_path(client, auth_headers, catalog):
    career_id = catalog["Software Engineer"].id

    response = await client.get(f"/api/career/paths/{career_id}/learning", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["career_path"] == "Software Engineer"
    assert body["learning_path"]["degraded"] is True
    assert body["career_details"]["learning_path"][0]["title"] == "Learn Programming Fundamentals"
