"""Unit tests for QueryOptions."""

from __future__ import annotations

import pydantic
import pytest

from rallyrest.core import InvalidRefError, ValidationError
from rallyrest.models import QueryOptions, Scope
from rallyrest.utils import where


class TestQueryOptionsDefaults:
    """Test default merging and correction."""

    def test_defaults(self):
        options = QueryOptions.apply_defaults({"type": "defect"})

        assert options.start == 1
        assert options.page_size == 200
        assert options.limit is None

    def test_wire_alias_accepted(self):
        options = QueryOptions.apply_defaults({"type": "defect", "pageSize": 50})
        assert options.page_size == 50

    def test_none_values_take_defaults(self):
        options = QueryOptions.apply_defaults({"type": "defect", "start": None, "pageSize": None})

        assert options.start == 1
        assert options.page_size == 200

    @pytest.mark.parametrize("page_size", [0, -10])
    def test_non_positive_page_size_raised_to_one(self, page_size):
        options = QueryOptions.apply_defaults({"type": "defect", "page_size": page_size})
        assert options.page_size == 1

    def test_apply_defaults_returns_new_instance(self):
        original = QueryOptions(type="defect", limit=10)

        options = QueryOptions.apply_defaults(original)

        assert options == original
        assert options is not original

    def test_apply_defaults_does_not_mutate_mapping(self):
        raw = {"type": "defect", "pageSize": 0}
        QueryOptions.apply_defaults(raw)
        assert raw == {"type": "defect", "pageSize": 0}

    def test_options_are_frozen(self):
        options = QueryOptions(type="defect")
        with pytest.raises(pydantic.ValidationError):
            options.limit = 5


class TestQueryOptionsValidation:
    """Test invalid options are rejected."""

    def test_locator_required(self):
        with pytest.raises(ValidationError, match="ref or type"):
            QueryOptions.apply_defaults({"limit": 5})

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            QueryOptions.apply_defaults({"type": "defect", "limit": -1})

    def test_start_below_one_rejected(self):
        with pytest.raises(ValidationError):
            QueryOptions.apply_defaults({"type": "defect", "start": 0})

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            QueryOptions.apply_defaults({})


class TestQueryOptionsRequest:
    """Test resource path and parameter building."""

    def test_resource_path_from_type(self):
        assert QueryOptions(type="hierarchicalrequirement").resource_path == (
            "/hierarchicalrequirement"
        )

    def test_resource_path_from_collection_ref(self):
        options = QueryOptions(
            ref="https://rally1.rallydev.com/slm/webservice/v2.0/defect/12/tasks"
        )
        assert options.resource_path == "/defect/12/tasks"

    def test_invalid_ref_raises(self):
        options = QueryOptions(ref="invalid-ref")
        with pytest.raises(InvalidRefError):
            options.resource_path

    def test_to_params_minimal(self):
        options = QueryOptions(type="defect")
        assert options.to_params(start=1, page_size=200) == {"start": 1, "pagesize": 200}

    def test_to_params_full(self):
        options = QueryOptions(
            type="defect",
            order="Rank",
            query=where("State", "=", "Open").and_("Priority", "=", "High Attention"),
            fetch=["FormattedID", "Name"],
            scope=Scope(project="/project/5", up=False, down=True),
        )

        params = options.to_params(start=201, page_size=100)

        assert params == {
            "start": 201,
            "pagesize": 100,
            "order": "Rank",
            "query": '((State = Open) AND (Priority = "High Attention"))',
            "fetch": "FormattedID,Name",
            "project": "/project/5",
            "projectScopeUp": "false",
            "projectScopeDown": "true",
        }

    def test_workspace_scope_used_without_project(self):
        options = QueryOptions.apply_defaults(
            {"type": "defect", "scope": {"workspace": {"_ref": "/workspace/9"}}}
        )

        params = options.to_params(start=1, page_size=10)

        assert params["workspace"] == "/workspace/9"
        assert "project" not in params

    def test_fetch_true(self):
        options = QueryOptions(type="defect", fetch=True)
        assert options.to_params(start=1, page_size=1)["fetch"] == "true"
