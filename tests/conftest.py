import json

import pytest

from form_prefill.models import FieldType, Form, FormField, GlobalData


def make_form(form_id, dependencies=(), fields=None, name=None):
    """Small helper so graphs read like adjacency lists."""
    if fields is None:
        fields = (FormField(id="email", label="Email", type=FieldType.EMAIL),)
    return Form(
        id=form_id,
        name=name or f"Form {form_id}",
        fields=tuple(fields),
        dependencies=tuple(dependencies),
    )


@pytest.fixture
def diamond_graph():
    """A (no deps); B->A; C->A; D->B; E->C,D."""
    return {
        "A": make_form("A"),
        "B": make_form("B", ["A"]),
        "C": make_form("C", ["A"]),
        "D": make_form("D", ["B"]),
        "E": make_form("E", ["C", "D"]),
    }


@pytest.fixture
def two_cycle_graph():
    return {
        "A": make_form("A", ["B"]),
        "B": make_form("B", ["A"]),
    }


@pytest.fixture
def three_cycle_graph():
    return {
        "A": make_form("A", ["B"]),
        "B": make_form("B", ["C"]),
        "C": make_form("C", ["A"]),
    }


@pytest.fixture
def global_data():
    return GlobalData(
        action_properties=("status", "created_at"),
        client_org_properties=("org_name",),
    )


@pytest.fixture
def sample_blueprint():
    """Blueprint dict resembling a real intake workflow."""
    return {
        "forms": [
            {
                "id": "form-a",
                "name": "Contact Information Form",
                "fields": [
                    {"id": "email", "label": "Email Address", "type": "email"},
                    {"id": "name", "label": "Full Name", "type": "text"},
                ],
                "dependencies": [],
            },
            {
                "id": "form-b",
                "name": "Preferences Survey",
                "fields": [
                    {"id": "completed_at", "label": "Completion Date", "type": "date"},
                    {"id": "status", "label": "Survey Status", "type": "text"},
                ],
                "dependencies": ["form-a"],
            },
            {
                "id": "form-d",
                "name": "Advanced Configuration",
                "fields": [
                    {"id": "email", "label": "Notification Email", "type": "email"},
                    {"id": "dynamic_object", "label": "Custom Data Object", "type": "object"},
                ],
                "dependencies": ["form-b", "ghost"],
            },
        ],
        "global_data": {
            "action_properties": ["status", "created_at"],
            "client_org_properties": ["org_name"],
        },
    }


@pytest.fixture
def blueprint_file(tmp_path, sample_blueprint):
    path = tmp_path / "blueprint.json"
    path.write_text(json.dumps(sample_blueprint), encoding="utf-8")
    return path
