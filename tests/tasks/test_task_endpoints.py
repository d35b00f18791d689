import pytest
from fastapi import status
from app.models.task import Task


@pytest.fixture
def project_with_member(create_test_user, make_project):
    owner = create_test_user(email="owner@example.com", name="Owner")
    member = create_test_user(email="member@example.com", name="Member")
    return make_project(owner, members=[member]), owner, member


class TestTaskEndpoints:
    """Test cases for /api/v1/tasks endpoints"""

    def test_create_task_defaults(self, client, auth_headers, project_with_member):
        project, owner, member = project_with_member

        response = client.post(
            "/api/v1/tasks/",
            json={"title": "T1", "project_id": project.id, "created_by_id": owner.id},
            headers=auth_headers(member),
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "TODO"
        assert data["priority"] == "NORMAL"
        assert data["created_by_id"] == member.id
        assert data["created_by"]["email"] == "member@example.com"
        assert data["project"]["id"] == project.id
        assert data["assigned_to"] is None

    def test_create_task_without_project(self, client, auth_headers, project_with_member):
        _, owner, _ = project_with_member

        response = client.post("/api/v1/tasks/", json={"title": "T1"}, headers=auth_headers(owner))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Project ID is required to create a task"

    def test_create_task_invalid_status(self, client, auth_headers, project_with_member):
        project, owner, _ = project_with_member

        response = client.post(
            "/api/v1/tasks/",
            json={"title": "T1", "project_id": project.id, "status": "BLOCKED"},
            headers=auth_headers(owner),
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_task_outsider_forbidden(
        self, client, auth_headers, create_test_user, project_with_member
    ):
        project, _, _ = project_with_member
        outsider = create_test_user(email="outsider@example.com")

        response = client.post(
            "/api/v1/tasks/",
            json={"title": "T1", "project_id": project.id},
            headers=auth_headers(outsider),
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_tasks(self, client, auth_headers, project_with_member, make_task):
        project, owner, member = project_with_member
        make_task(project, member, title="Mine")
        make_task(project, owner, title="Assigned", assigned_to=member)
        make_task(project, owner, title="Hidden")

        response = client.get("/api/v1/tasks/", headers=auth_headers(member))

        assert response.status_code == status.HTTP_200_OK
        assert [t["title"] for t in response.json()["tasks"]] == ["Assigned", "Mine"]

    def test_get_task_hidden_is_not_found(self, client, auth_headers, project_with_member, make_task):
        project, owner, member = project_with_member
        task = make_task(project, owner)

        response = client.get(f"/api/v1/tasks/{task.id}", headers=auth_headers(member))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Task not found or unauthorized"

    def test_patch_task_partial(self, client, auth_headers, project_with_member, make_task):
        project, owner, member = project_with_member
        task = make_task(project, owner, title="Write docs", priority="HIGH", assigned_to=member)

        response = client.patch(
            f"/api/v1/tasks/{task.id}",
            json={"status": "DONE"},
            headers=auth_headers(member),
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "DONE"
        assert data["title"] == "Write docs"
        assert data["priority"] == "HIGH"
        assert data["assigned_to_id"] == member.id

    def test_patch_task_clear_assignee(self, client, auth_headers, project_with_member, make_task):
        project, owner, member = project_with_member
        task = make_task(project, owner, assigned_to=member)

        response = client.patch(
            f"/api/v1/tasks/{task.id}",
            json={"assigned_to_id": None},
            headers=auth_headers(owner),
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["assigned_to"] is None

    def test_patch_task_cannot_move_project(
        self, client, auth_headers, project_with_member, make_project, make_task
    ):
        project, owner, _ = project_with_member
        other_project = make_project(owner, name="Other")
        task = make_task(project, owner)

        response = client.patch(
            f"/api/v1/tasks/{task.id}",
            json={"project_id": other_project.id, "title": "Moved?"},
            headers=auth_headers(owner),
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["project_id"] == project.id
        assert response.json()["title"] == "Moved?"

    def test_delete_task_by_assignee_forbidden(
        self, client, auth_headers, project_with_member, make_task, db_session
    ):
        project, owner, member = project_with_member
        task = make_task(project, owner, assigned_to=member)

        response = client.delete(f"/api/v1/tasks/{task.id}", headers=auth_headers(member))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "You can only delete tasks you created"
        assert db_session.query(Task).count() == 1

    def test_delete_task_by_creator(
        self, client, auth_headers, project_with_member, make_task, db_session
    ):
        project, owner, _ = project_with_member
        task = make_task(project, owner)

        response = client.delete(f"/api/v1/tasks/{task.id}", headers=auth_headers(owner))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Task deleted successfully"
        assert db_session.query(Task).count() == 0

    def test_delete_missing_task(self, client, auth_headers, project_with_member):
        _, owner, _ = project_with_member

        response = client.delete("/api/v1/tasks/missing", headers=auth_headers(owner))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_tasks_require_authentication(self, client):
        response = client.get("/api/v1/tasks/")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
