"""
Document and signature API tests.
"""

from smartstart.models.document import Signature


def _create_doc(client, headers, **fields):
    body = {"name": "Founders Agreement", "type": "legal", "content": "Terms"}
    body.update(fields)
    res = client.post("/api/documents", json=body, headers=headers)
    assert res.status_code == 201, res.get_json()
    return res.get_json()["data"]


def test_create_and_list(client, alice):
    user, headers = alice
    doc = _create_doc(client, headers)
    assert doc["status"] == "draft"
    assert doc["userId"] == user["id"]

    docs = client.get("/api/documents", headers=headers).get_json()["data"]
    assert [d["id"] for d in docs] == [doc["id"]]


def test_create_requires_name_and_type(client, alice):
    _, headers = alice
    res = client.post("/api/documents", json={"content": "x"}, headers=headers)
    assert res.status_code == 400
    assert set(res.get_json()["details"]) == {"name", "type"}


def test_sign_document(client, alice):
    user, headers = alice
    doc = _create_doc(client, headers)
    res = client.post(f"/api/documents/{doc['id']}/sign",
                      json={"signatureData": "Alice A"}, headers=headers)
    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["document"]["status"] == "signed"
    assert data["signature"]["documentId"] == doc["id"]
    assert data["signature"]["userId"] == user["id"]
    assert data["signature"]["signatureData"] == "Alice A"
    assert Signature.query.count() == 1

    actions = [e["action"] for e in client.get("/api/audit-trails", headers=headers).get_json()["data"]]
    assert actions == ["document.signed", "document.created"]


def test_cannot_sign_someone_elses_document(client, alice, bob):
    _, alice_h = alice
    _, bob_h = bob
    doc = _create_doc(client, alice_h)
    res = client.post(f"/api/documents/{doc['id']}/sign", json={"signatureData": "Bob"}, headers=bob_h)
    assert res.status_code == 404
    assert res.get_json()["error"] == "Document not found"
    assert Signature.query.count() == 0


def test_documents_are_private(client, alice, bob):
    _, alice_h = alice
    _, bob_h = bob
    _create_doc(client, alice_h)
    assert client.get("/api/documents", headers=bob_h).get_json()["data"] == []
