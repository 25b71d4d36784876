import os
import tempfile
import unittest

import yaml

from albert_encoder.utils.config import Config, load_yaml


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.yaml_path = os.path.join(self.temp_dir.name, "config.yaml")

    def tearDown(self):
        self.temp_dir.cleanup()

    def _write(self, data):
        with open(self.yaml_path, "w") as f:
            yaml.dump(data, f)

    def test_load_yaml_valid(self):
        self._write({"key": "value", "nested": {"k": 1}})

        config = load_yaml(self.yaml_path)
        self.assertIsInstance(config, Config)
        self.assertEqual(config.data["key"], "value")
        self.assertEqual(config.data["nested"]["k"], 1)

    def test_load_yaml_section(self):
        self._write({"model": {"hidden_size": 64}, "other": 1})
        self.assertEqual(load_yaml(self.yaml_path, section="model").data, {"hidden_size": 64})

    def test_missing_section_returns_root(self):
        self._write({"hidden_size": 64})
        self.assertEqual(load_yaml(self.yaml_path, section="model").data, {"hidden_size": 64})

    def test_non_mapping_section(self):
        self._write({"model": [1, 2]})
        with self.assertRaises(ValueError):
            load_yaml(self.yaml_path, section="model")

    def test_load_yaml_invalid_structure(self):
        # List at root instead of dict
        self._write(["item1", "item2"])

        with self.assertRaises(ValueError):
            load_yaml(self.yaml_path)

    def test_load_yaml_file_not_found(self):
        with self.assertRaises(FileNotFoundError):
            load_yaml("non_existent_file.yaml")


if __name__ == "__main__":
    unittest.main()
