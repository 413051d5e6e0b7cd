"""
Dashboard stats tests.
"""

from smartstart.services.dashboard_service import get_dashboard_stats, get_stage_counts


def _seed(client, headers):
    for name, stage in (("One", "discovery"), ("Two", "launch"), ("Three", "launch")):
        res = client.post("/api/ventures", json={"name": name, "stage": stage}, headers=headers)
        assert res.status_code == 201
    doc = client.post("/api/documents", json={"name": "NDA", "type": "legal"}, headers=headers)
    doc_id = doc.get_json()["data"]["id"]
    client.post(f"/api/documents/{doc_id}/sign", json={"signatureData": "Alice A"}, headers=headers)


def test_stats_for_new_user_are_zero(client, alice):
    _, headers = alice
    res = client.get("/api/dashboard/stats", headers=headers)
    assert res.status_code == 200
    assert res.get_json()["data"] == {
        "ventures": {"total": 0, "byStage": {"discovery": 0, "development": 0, "launch": 0}},
        "activity": {"auditEntries": 0, "daysActive": 0, "completedStages": 0},
        "documents": {"total": 0, "signed": 0},
    }


def test_stats_reflect_user_data(client, alice):
    _, headers = alice
    _seed(client, headers)

    data = client.get("/api/dashboard/stats", headers=headers).get_json()["data"]
    assert data["ventures"]["total"] == 3
    assert data["ventures"]["byStage"] == {"discovery": 1, "development": 0, "launch": 2}
    # 3 venture.created + document.created + document.signed
    assert data["activity"]["auditEntries"] == 5
    assert data["activity"]["daysActive"] == 1
    assert data["activity"]["completedStages"] == 2
    assert data["documents"] == {"total": 1, "signed": 1}


def test_stats_are_per_user(client, alice, bob):
    alice_user, alice_h = alice
    bob_user, _ = bob
    _seed(client, alice_h)

    assert get_dashboard_stats(bob_user["id"])["ventures"]["total"] == 0
    assert get_dashboard_stats(bob_user["id"])["documents"]["signed"] == 0
    assert get_stage_counts(alice_user["id"])["launch"] == 2
