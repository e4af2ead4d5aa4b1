# File: tests/test_task_service.py

from datetime import datetime, timedelta, timezone

import pytest

from app.core.exceptions import AccessDeniedError, InvalidArgumentError, NotFoundError
from app.models.task import TaskPriority, TaskStatus
from app.schemas.task import TaskRequest
from app.services import task_service
from app.services.cache import task_cache


def _request(**overrides) -> TaskRequest:
    data = dict(
        title="New Test Task",
        description="Task Description",
        status=TaskStatus.PENDING,
        priority=TaskPriority.MEDIUM,
        due_date=datetime.now(timezone.utc) + timedelta(days=5),
    )
    data.update(overrides)
    return TaskRequest(**data)


@pytest.fixture()
def regular(make_user):
    return make_user("regular@tasks.io", first_name="Reg", last_name="Ular")


@pytest.fixture()
def outsider(make_user):
    return make_user("outsider@tasks.io")


@pytest.fixture()
def admin_task(make_task, admin):
    return make_task(admin, title="Admin Task")


def test_create_task_sets_author(db, regular):
    task = task_service.create_task(db, _request(), regular)

    assert task.title == "New Test Task"
    assert task.status == TaskStatus.PENDING
    assert task.author_id == regular.id
    assert task.author_name == "Reg Ular"
    assert task.assignee_id is None


def test_regular_user_cannot_pick_assignee_on_create(db, regular, outsider):
    with pytest.raises(AccessDeniedError):
        task_service.create_task(db, _request(assignee_id=outsider.id), regular)


def test_admin_may_pick_assignee_on_create(db, admin, regular):
    task = task_service.create_task(db, _request(assignee_id=regular.id), admin)
    assert task.assignee_id == regular.id
    assert task.assignee_name == "Reg Ular"


def test_create_with_unknown_assignee_is_not_found(db, admin):
    with pytest.raises(NotFoundError):
        task_service.create_task(db, _request(assignee_id=9999), admin)


def test_outsider_cannot_read_update_or_comment(db, make_task, regular, outsider):
    task = make_task(regular)

    with pytest.raises(AccessDeniedError):
        task_service.get_task(db, task.id, outsider)
    with pytest.raises(AccessDeniedError):
        task_service.update_task(db, task.id, _request(title="hijack"), outsider)
    with pytest.raises(AccessDeniedError):
        task_service.update_task_status(db, task.id, "COMPLETED", outsider)


def test_admin_can_read_update_assign_and_delete_any_task(db, make_task, admin, regular, outsider):
    task = make_task(regular)

    assert task_service.get_task(db, task.id, admin).id == task.id

    updated = task_service.update_task(db, task.id, _request(title="Renamed", priority=TaskPriority.HIGH), admin)
    assert updated.title == "Renamed"
    assert updated.priority == TaskPriority.HIGH
    assert updated.author_id == regular.id

    assigned = task_service.assign_task(db, task.id, outsider.id, admin)
    assert assigned.assignee_id == outsider.id

    task_service.delete_task(db, task.id, admin)
    with pytest.raises(NotFoundError):
        task_service.get_task(db, task.id, admin)


def test_admin_full_update_can_clear_assignee(db, make_task, admin, regular, outsider):
    task = make_task(regular, assignee=outsider)

    kept = task_service.update_task(db, task.id, _request(), admin)
    assert kept.assignee_id == outsider.id

    cleared = task_service.update_task(db, task.id, _request(assignee_id=None), admin)
    assert cleared.assignee_id is None


def test_user_cannot_delete_task(db, admin_task, regular):
    with pytest.raises(AccessDeniedError):
        task_service.delete_task(db, admin_task.id, regular)


def test_user_cannot_assign_task(db, admin_task, admin, regular):
    with pytest.raises(AccessDeniedError):
        task_service.assign_task(db, admin_task.id, admin.id, regular)


def test_admin_only_actions_are_refused_before_lookup(db, regular):
    # no such task, but the caller is not an admin anyway
    with pytest.raises(AccessDeniedError):
        task_service.delete_task(db, 424242, regular)
    with pytest.raises(AccessDeniedError):
        task_service.assign_task(db, 424242, regular.id, regular)


def test_missing_task_is_not_found_before_access_check(db, outsider):
    with pytest.raises(NotFoundError):
        task_service.get_task(db, 424242, outsider)
    with pytest.raises(NotFoundError):
        task_service.update_task_status(db, 424242, "COMPLETED", outsider)


def test_assign_to_unknown_user_is_not_found(db, admin_task, admin):
    with pytest.raises(NotFoundError):
        task_service.assign_task(db, admin_task.id, 9999, admin)


def test_admin_can_update_status(db, admin_task, admin):
    response = task_service.update_task_status(db, admin_task.id, "COMPLETED", admin)
    assert response.status == TaskStatus.COMPLETED


def test_non_assignee_user_cannot_update_status(db, admin_task, regular):
    with pytest.raises(AccessDeniedError):
        task_service.update_task_status(db, admin_task.id, "COMPLETED", regular)


def test_assignee_updates_status_but_not_other_fields(db, make_task, admin, regular):
    task = make_task(admin, assignee=regular, title="Original")

    response = task_service.update_task_status(db, task.id, "in_progress", regular)
    assert response.status == TaskStatus.IN_PROGRESS

    with pytest.raises(AccessDeniedError):
        task_service.update_task(db, task.id, _request(title="Changed", status=TaskStatus.COMPLETED), regular)

    unchanged = task_service.get_task(db, task.id, regular)
    assert unchanged.title == "Original"
    assert unchanged.status == TaskStatus.IN_PROGRESS


def test_author_who_is_not_assignee_cannot_change_status(db, make_task, regular, outsider):
    task = make_task(regular, assignee=outsider)
    with pytest.raises(AccessDeniedError):
        task_service.update_task_status(db, task.id, "COMPLETED", regular)


@pytest.mark.parametrize("value", ["DONE", "", "complete"])
def test_unknown_status_is_invalid_argument(db, admin_task, admin, value):
    with pytest.raises(InvalidArgumentError):
        task_service.update_task_status(db, admin_task.id, value, admin)


def test_missing_status_is_invalid_argument(db, admin_task, admin):
    with pytest.raises(InvalidArgumentError):
        task_service.update_task_status(db, admin_task.id, None, admin)


def test_user_sees_only_their_tasks(db, make_task, admin, regular, outsider):
    mine = make_task(regular, title="mine")
    assigned = make_task(admin, assignee=regular, title="assigned to me")
    make_task(admin, title="not mine")
    make_task(outsider, title="someone else's")

    titles = [t.title for t in task_service.list_tasks(db, regular, 0, 10)]

    assert sorted(titles) == sorted([mine.title, assigned.title])


def test_admin_sees_all_tasks(db, make_task, admin, regular, outsider):
    make_task(regular)
    make_task(outsider)
    make_task(admin)

    assert len(task_service.list_tasks(db, admin, 0, 10)) == 3


def test_list_is_newest_first_and_paged(db, make_task, regular):
    for i in range(5):
        make_task(regular, title=f"task {i}")

    first = task_service.list_tasks(db, regular, 0, 2)
    second = task_service.list_tasks(db, regular, 1, 2)
    last = task_service.list_tasks(db, regular, 2, 2)

    assert [t.title for t in first] == ["task 4", "task 3"]
    assert [t.title for t in second] == ["task 2", "task 1"]
    assert [t.title for t in last] == ["task 0"]


def test_page_past_the_end_is_empty(db, make_task, regular):
    for _ in range(3):
        make_task(regular)

    assert task_service.list_tasks(db, regular, page=5, size=10) == []


@pytest.mark.parametrize("page, size", [(-1, 10), (0, 0), (0, -3)])
def test_bad_page_parameters_give_empty_list(db, make_task, regular, page, size):
    make_task(regular)
    assert task_service.list_tasks(db, regular, page=page, size=size) == []


def test_paginate_slices_in_memory():
    items = list(range(7))
    assert task_service.paginate(items, 0, 3) == [0, 1, 2]
    assert task_service.paginate(items, 2, 3) == [6]
    assert task_service.paginate(items, 3, 3) == []
    assert task_service.paginate(items, -1, 3) == []
    assert task_service.paginate(items, 0, 0) == []
    assert task_service.paginate([], 0, 10) == []


def test_writes_invalidate_cached_reads(db, make_task, admin, regular):
    task = make_task(admin, assignee=regular)

    before = task_service.get_task(db, task.id, regular)
    listed = task_service.list_tasks(db, regular, 0, 10)
    assert before.status == TaskStatus.PENDING
    assert len(task_cache) == 2

    task_service.update_task_status(db, task.id, "COMPLETED", regular)

    assert task_service.get_task(db, task.id, regular).status == TaskStatus.COMPLETED
    assert task_service.list_tasks(db, regular, 0, 10)[0].status == TaskStatus.COMPLETED
    assert listed[0].status == TaskStatus.PENDING


def test_cached_task_is_still_access_checked(db, make_task, regular, outsider):
    task = make_task(regular)
    task_service.get_task(db, task.id, regular)

    with pytest.raises(AccessDeniedError):
        task_service.get_task(db, task.id, outsider)


def test_behaviour_is_the_same_without_cache(db, make_task, admin, regular, monkeypatch):
    monkeypatch.setattr(task_cache, "enabled", False)
    task = make_task(admin, assignee=regular)

    task_service.get_task(db, task.id, regular)
    task_service.update_task_status(db, task.id, "CANCELLED", regular)

    assert len(task_cache) == 0
    assert task_service.get_task(db, task.id, regular).status == TaskStatus.CANCELLED
    assert task_service.list_tasks(db, regular, 0, 10)[0].status == TaskStatus.CANCELLED


def test_huge_page_is_empty_and_not_cached(db, make_task, regular):
    make_task(regular)

    assert task_service.list_tasks(db, regular, 2**62, 10) == []
    assert len(task_cache) == 0


def test_writes_store_the_fresh_view(db, make_task, admin, regular):
    task = make_task(admin, assignee=regular)
    task_service.list_tasks(db, regular, 0, 10)

    updated = task_service.update_task_status(db, task.id, "IN_PROGRESS", regular)

    cached = task_cache.get_or_load(("task", task.id), lambda: pytest.fail("should be cached"))
    assert cached == updated
    assert cached.status == TaskStatus.IN_PROGRESS
    assert ("tasks", regular.id, 0, 10) not in task_cache


def test_delete_evicts_the_task_view(db, make_task, admin):
    task = make_task(admin)
    task_service.get_task(db, task.id, admin)

    task_service.delete_task(db, task.id, admin)

    assert ("task", task.id) not in task_cache
    with pytest.raises(NotFoundError):
        task_service.get_task(db, task.id, admin)


def test_walking_pages_keeps_cache_bounded(db, regular, monkeypatch):
    monkeypatch.setattr(task_cache, "max_entries", 20)

    for page in range(200):
        task_service.list_tasks(db, regular, page, 10)

    assert len(task_cache) == 20
