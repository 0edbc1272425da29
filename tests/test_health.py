# tests/test_health.py
import pytest


class TestHealth:
    """Health endpoint"""

    def test_health_ok(self, test_client):
        """GET /health returns status"""
        _, response = test_client.get("/health")

        assert response.status == 200
        data = response.json
        assert data["status"] == "ok"
        assert data["messages"] == 0
        assert data["users"] == 0
        assert "timestamp" in data

    def test_health_counts(self, test_client):
        """Counts follow registrations and posts"""
        test_client.post("/chat/users", json={"username": "alice"})
        test_client.post("/chat/messages", json={"sender": "alice", "content": "hi"})

        _, response = test_client.get("/health")

        assert response.json["users"] == 1
        assert response.json["messages"] == 2
