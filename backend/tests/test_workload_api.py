def test_workload_reflects_stored_timetables(client, form_payload):
    client.post("/api/faculty/", json={"name": "Ravi Kumar"})
    client.post("/api/faculty/", json={"name": "Anita Rao"})
    pairs = [
        {"subject_name": "Data Structures", "teacher_ids": ["Ravi Kumar"]},
        {"subject_name": "Algorithms", "teacher_ids": ["Ravi Kumar"]},
        {"subject_name": "Data Structures Lab", "teacher_ids": ["Ravi Kumar"], "is_lab": True},
    ]
    assert client.post("/api/timetables/generate", json=form_payload(subject_teacher_pairs=pairs)).status_code == 201

    listed = {item["name"]: item for item in client.get("/api/workload/").json()}
    assert listed["Ravi Kumar"]["assigned_subjects"] == 2
    assert listed["Ravi Kumar"]["remaining_capacity"] == 1
    assert listed["Ravi Kumar"]["is_available"] is True
    assert listed["Anita Rao"]["assigned_subjects"] == 0
    assert listed["Anita Rao"]["short_name"] == "AR"


def test_single_faculty_workload(client):
    client.post("/api/faculty/", json={"name": "Ravi Kumar"})

    response = client.get("/api/workload/ravi kumar")
    assert response.status_code == 200
    assert response.json()["max_subjects"] == 3

    assert client.get("/api/workload/Nobody").status_code == 404
