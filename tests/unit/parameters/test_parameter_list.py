from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_numeric.parameters import R_PLUS, ConstraintError, Parameter, ParameterList


@pytest.fixture
def parameters() -> ParameterList:
    return ParameterList([Parameter("a", 1.0, R_PLUS), Parameter("b", 2.0), Parameter("c", 3.0)])


class TestParameterList:
    def test_order_and_lookup(self, parameters: ParameterList) -> None:
        assert parameters.parameter_names == ["a", "b", "c"]
        assert len(parameters) == 3
        assert "b" in parameters
        assert parameters.has_parameter("c")
        assert not parameters.has_parameter("d")
        assert parameters.get_parameter_value("b") == 2.0

    def test_add_parameter_stores_clone(self) -> None:
        original = Parameter("x", 1.0)
        parameters = ParameterList()

        stored = parameters.add_parameter(original)
        original.value = 9.0

        assert stored is not original
        assert parameters.get_parameter_value("x") == 1.0

    def test_share_parameter_stores_instance(self) -> None:
        original = Parameter("x", 1.0)
        parameters = ParameterList()

        parameters.share_parameter(original)
        original.value = 9.0

        assert parameters.get_parameter("x") is original
        assert parameters.get_parameter_value("x") == 9.0

    def test_duplicate_name_rejected(self, parameters: ParameterList) -> None:
        with pytest.raises(ValueError, match="already"):
            parameters.add_parameter(Parameter("a"))
        with pytest.raises(ValueError, match="already"):
            parameters.share_parameter(Parameter("b"))

    def test_unknown_name(self, parameters: ParameterList) -> None:
        with pytest.raises(KeyError, match="not found"):
            parameters.get_parameter("zzz")
        with pytest.raises(KeyError):
            parameters.set_parameter_value("zzz", 1.0)

    def test_set_parameter_value_validates(self, parameters: ParameterList) -> None:
        parameters.set_parameter_value("a", 4.0)
        assert parameters.get_parameter_value("a") == 4.0
        with pytest.raises(ConstraintError):
            parameters.set_parameter_value("a", -1.0)
        assert parameters.get_parameter_value("a") == 4.0

    def test_delete_parameter(self, parameters: ParameterList) -> None:
        removed = parameters.delete_parameter("b")
        assert removed.name == "b"
        assert parameters.parameter_names == ["a", "c"]

    def test_sub_list_and_common(self, parameters: ParameterList) -> None:
        sub = parameters.sub_list(["c", "a"])
        assert sub.parameter_names == ["c", "a"]
        assert sub.get_parameter("a") is not parameters.get_parameter("a")

        other = ParameterList([Parameter("b", 0.0), Parameter("z", 0.0)])
        assert parameters.get_common_parameters_with(other).parameter_names == ["b"]

    def test_match_parameters_values(self, parameters: ParameterList) -> None:
        other = ParameterList([Parameter("a", 1.0), Parameter("b", 5.0), Parameter("z", 7.0)])

        changed = parameters.match_parameters_values(other)

        assert changed.parameter_names == ["b"]
        assert parameters.get_parameter_value("b") == 5.0

    def test_clone_is_deep(self, parameters: ParameterList) -> None:
        clone = parameters.clone()
        clone.set_parameter_value("b", 100.0)
        assert parameters.get_parameter_value("b") == 2.0
        assert clone.get_parameter("a").constraint == R_PLUS

    def test_iteration_and_repr(self, parameters: ParameterList) -> None:
        assert [p.value for p in parameters] == [1.0, 2.0, 3.0]
        assert repr(parameters) == "ParameterList(a=1.0, b=2.0, c=3.0)"


class TestParameterRename:
    def test_lookup_follows_rename(self, parameters: ParameterList) -> None:
        parameters.get_parameter("a").name = "alpha"

        assert parameters.parameter_names == ["alpha", "b", "c"]
        assert parameters.has_parameter("alpha")
        assert not parameters.has_parameter("a")
        assert parameters.get_parameter_value("alpha") == 1.0
        with pytest.raises(KeyError):
            parameters.get_parameter("a")

    def test_renamed_name_stays_unique(self, parameters: ParameterList) -> None:
        parameters.get_parameter("a").name = "alpha"

        with pytest.raises(ValueError, match="already"):
            parameters.add_parameter(Parameter("alpha", 2.0))
        parameters.add_parameter(Parameter("a", 2.0))

        assert parameters.parameter_names == ["alpha", "b", "c", "a"]

    def test_delete_renamed_parameter(self, parameters: ParameterList) -> None:
        parameters.get_parameter("b").name = "beta"
        removed = parameters.delete_parameter("beta")

        assert removed.value == 2.0
        assert parameters.parameter_names == ["a", "c"]
