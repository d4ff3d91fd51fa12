"""Tests for FastAPI application endpoints"""


def push(client, title, content):
    return client.put("/pushDocument", json={"title": title, "content": content})


def test_root_endpoint(client):
    """Test root endpoint"""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "TF-IDF Gateway"
    assert data["version"] == "0.1.0"
    assert data["status"] == "running"


def test_health_endpoint(client):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data


def test_push_document_returns_corpus(client):
    push(client, "A", "the cat sat")
    response = push(client, "B", "the dog sat")

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "OK"
    assert [d["title"] for d in data["documents"]] == ["A", "B"]
    a, b = data["documents"]
    assert a["siblings"][0]["id"] == b["id"]
    assert b["siblings"][0]["id"] == a["id"]
    assert a["siblings"][0]["similarity"] == b["siblings"][0]["similarity"]
    assert "vector" not in a


def test_duplicate_title_is_acknowledged(client):
    first = push(client, "A", "the cat sat").json()
    response = push(client, "A", "completely different words")

    assert response.status_code == 200
    assert response.json() == first


def test_blank_title_rejected(client):
    response = push(client, "  ", "text")
    assert response.status_code == 422


def test_missing_title_rejected(client):
    response = client.put("/pushDocument", json={"content": "text"})
    assert response.status_code == 422


def test_list_documents(client):
    assert client.get("/documents").json() == {"message": "OK", "documents": []}

    push(client, "A", "red apple")
    push(client, "B", "green apple")
    push(client, "C", "blue sky")

    data = client.get("/documents").json()
    by_title = {d["title"]: d for d in data["documents"]}
    assert by_title["C"]["siblings"] == []
    assert [s["id"] for s in by_title["A"]["siblings"]] == [by_title["B"]["id"]]


def test_store_failure_returns_503(broken_client):
    response = push(broken_client, "A", "text")
    assert response.status_code == 503
    assert response.json()["detail"] == "Document store unavailable"
