import pytest


@pytest.fixture
def answered_survey(client, user_headers, created_survey):
    sid = created_survey["id"]
    name_q, colour_q, rating_q = (q["id"] for q in created_survey["questions"])
    for name, colour, rating in (("Ann", "red", "3"), ("Bob", "blue", "5"), ("Cy", "red", "4")):
        r = client.post(
            f"/api/surveys/{sid}/responses",
            json={"responses": [
                {"question_id": name_q, "response": name},
                {"question_id": colour_q, "response": colour},
                {"question_id": rating_q, "response": rating},
            ]},
            headers=user_headers,
        )
        assert r.status_code == 201
    return created_survey


def test_results(client, admin_headers, answered_survey):
    r = client.get(f"/api/surveys/{answered_survey['id']}/results", headers=admin_headers)
    body = r.json()

    assert r.status_code == 200
    assert body["total_responses"] == 3
    by_text = {q["question_text"]: q for q in body["question_results"]}
    assert by_text["Favourite colour?"]["response_counts"] == {"red": 2, "blue": 1}
    assert by_text["Rate us"]["average_rating"] == 4.0
    assert by_text["Rate us"]["response_counts"] == {}


def test_csv_export(client, admin_headers, answered_survey):
    sid = answered_survey["id"]
    r = client.get(f"/api/surveys/{sid}/export/csv", headers=admin_headers)

    assert r.status_code == 200
    assert "text/csv" in r.headers["content-type"]
    assert f"survey_{sid}_responses.csv" in r.headers["content-disposition"]
    assert len(r.content.decode("utf-8").splitlines()) == 4


def test_pdf_export(client, admin_headers, answered_survey):
    sid = answered_survey["id"]
    r = client.get(f"/api/surveys/{sid}/export/pdf", headers=admin_headers)

    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert f"survey_{sid}_responses.pdf" in r.headers["content-disposition"]
    assert r.content.startswith(b"%PDF")


def test_share_link(client, admin_headers, created_survey):
    sid = created_survey["id"]
    r = client.get(f"/api/surveys/{sid}/share-link", headers=admin_headers)

    assert r.status_code == 200
    assert r.json()["shareLink"].endswith(f"/survey/{sid}")
    fetched = client.get(f"/api/v1/survey/{sid}", headers=admin_headers).json()
    assert fetched["share_link"] == r.json()["shareLink"]


@pytest.mark.parametrize("suffix", ["results", "export/csv", "export/pdf", "share-link"])
def test_reports_for_missing_survey(client, admin_headers, suffix):
    assert client.get(f"/api/surveys/999/{suffix}", headers=admin_headers).status_code == 404


def test_reports_require_admin(client, user_headers, created_survey):
    assert client.get(f"/api/surveys/{created_survey['id']}/results", headers=user_headers).status_code == 403
