STAGE_KEYS = ["ideaCheck", "marketResearch", "evaluation", "recommendation", "documents", "pitchDeck"]


class TestWorkflow:
    def test_default_workflow(self, client, startup_id):
        r = client.get(f"/api/workflow/{startup_id}")
        assert r.status_code == 200
        data = r.json()
        assert data["startupId"] == startup_id
        assert all(data[key] is False for key in STAGE_KEYS)
        assert data["updatedAt"]

    def test_invalid_startup_id(self, client):
        r = client.get("/api/workflow/not-a-guid")
        assert r.status_code == 400

    def test_update_round_trip(self, client, startup_id):
        r = client.post("/api/workflow/update", json={
            "startupId": startup_id,
            "ideaCheck": True,
            "evaluation": True,
        })
        assert r.status_code == 200
        assert r.json()["evaluation"] is True

        data = client.get(f"/api/workflow/{startup_id}").json()
        assert data["ideaCheck"] is True
        assert data["evaluation"] is True
        assert data["marketResearch"] is False

    def test_update_replaces_full_record(self, client, startup_id):
        client.post("/api/workflow/update", json={"startupId": startup_id, "ideaCheck": True})
        client.post("/api/workflow/update", json={"startupId": startup_id, "evaluation": True})

        data = client.get(f"/api/workflow/{startup_id}").json()
        assert data["ideaCheck"] is False
        assert data["evaluation"] is True

    def test_update_accepts_echoed_record(self, client, startup_id):
        record = client.get(f"/api/workflow/{startup_id}").json()
        record["marketResearch"] = True
        r = client.post("/api/workflow/update", json=record)
        assert r.status_code == 200
        assert r.json()["marketResearch"] is True

    def test_update_unknown_startup(self, client):
        r = client.post("/api/workflow/update", json={
            "startupId": "00000000-0000-0000-0000-000000000000",
            "evaluation": True,
        })
        assert r.status_code == 400

    def test_update_invalid_startup_id(self, client):
        r = client.post("/api/workflow/update", json={"startupId": "bad", "evaluation": True})
        assert r.status_code == 400

    def test_reset_archives_documents_and_flags(self, client, startup_id):
        client.post("/api/documents/generate-mock", json={"startupId": startup_id, "type": "Evaluation"})
        client.post("/api/workflow/update", json={"startupId": startup_id, "evaluation": True})

        r = client.post(f"/api/workflow/reset/{startup_id}")
        assert r.status_code == 200
        assert r.json()["archived_documents"] == 1

        assert client.get("/api/documents", params={"startupId": startup_id}).json() == []
        data = client.get(f"/api/workflow/{startup_id}").json()
        assert all(data[key] is False for key in STAGE_KEYS)

    def test_generate_after_reset_starts_new_lineage(self, client, startup_id):
        client.post("/api/documents/generate-mock", json={"startupId": startup_id, "type": "Evaluation"})
        client.post(f"/api/workflow/reset/{startup_id}")

        r = client.post("/api/documents/generate-mock", json={"startupId": startup_id, "type": "Evaluation"})
        assert r.json()["version"] == 1

    def test_complete_pitch_requires_workflow(self, client, startup_id):
        r = client.post(f"/api/workflow/complete-pitch/{startup_id}")
        assert r.status_code == 404

    def test_complete_pitch(self, client, startup_id):
        client.post("/api/workflow/update", json={"startupId": startup_id, "ideaCheck": True})

        r = client.post(f"/api/workflow/complete-pitch/{startup_id}")
        assert r.status_code == 200
        workflow = r.json()["workflow"]
        assert workflow["pitchDeck"] is True
        assert workflow["ideaCheck"] is True
