"""Tests for subtask and result wire forms."""

from __future__ import annotations

import dataclasses

import pytest

from app.core.task_types import ExecutionResult, Subtask


def test_subtask_wire_form():
    task = Subtask.from_dict({"taskId": "task-1", "taskName": "Fetch", "taskType": "fetchData"})
    assert task.to_dict() == {"taskId": "task-1", "taskName": "Fetch", "taskType": "fetchData"}


def test_subtask_missing_keys():
    assert Subtask.from_dict({}) == Subtask(task_id="", name="", task_type="")


def test_subtask_is_immutable():
    task = Subtask(task_id="task-1", name="x", task_type="processData")
    with pytest.raises(dataclasses.FrozenInstanceError):
        task.name = "y"


def test_result_wire_forms():
    assert ExecutionResult.success({"a": 1}).to_dict() == {"result": "Success", "data": {"a": 1}}
    assert ExecutionResult.failed("boom").to_dict() == {"result": "Failed", "error": "boom"}
