"""Unit tests for loading the name reference table."""

import pandas as pd
import pytest

from name_dict import NameDictError, load_name_dict, name_dict_from_frame
from player_core import EMPTY_NAME_DICT, infer_player_names


class TestLoadNameDict:
    """CSV loading into the three lookup sets."""

    @pytest.mark.parametrize("path", [None, ""])
    def test_no_path_is_empty_dict(self, path):
        assert load_name_dict(path) is EMPTY_NAME_DICT

    def test_loads_and_folds_values(self, names_csv):
        nd = load_name_dict(str(names_csv))
        assert nd.first == {"sam", "jane"}
        assert nd.last == {"okafor", "rivera"}
        assert nd.full == {"sam okafor"}
        assert not nd.is_empty

    def test_short_rows_are_padded(self, tmp_path):
        path = tmp_path / "names.csv"
        path.write_text("Sam,Okafor,Sam Okafor\nJane\n", encoding="utf-8")
        nd = load_name_dict(str(path))
        assert nd.first == {"sam", "jane"}
        assert nd.last == {"okafor"}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "names.csv"
        path.write_text("", encoding="utf-8")
        assert load_name_dict(str(path)).is_empty

    def test_missing_file_fails_fast(self, tmp_path):
        with pytest.raises(NameDictError, match="missing.csv"):
            load_name_dict(str(tmp_path / "missing.csv"))

    def test_ragged_file_fails_fast(self, tmp_path):
        path = tmp_path / "names.csv"
        path.write_text("Sam,Okafor\nJane,Doe,Jane Doe,extra\n", encoding="utf-8")
        with pytest.raises(NameDictError):
            load_name_dict(str(path))

    def test_error_is_a_value_error(self, tmp_path):
        with pytest.raises(ValueError):
            load_name_dict(str(tmp_path / "missing.csv"))


class TestNameDictFromFrame:
    """Folding an already-loaded frame."""

    def test_single_column(self):
        nd = name_dict_from_frame(pd.DataFrame({0: ["Sam", " ", "ALEX"]}))
        assert nd.first == {"sam", "alex"}
        assert nd.last == frozenset()
        assert nd.full == frozenset()

    def test_loaded_dict_drives_inference(self, names_csv):
        nd = load_name_dict(str(names_csv))
        assert infer_player_names("Join Jane for a great show!", nd) == ["Jane"]
