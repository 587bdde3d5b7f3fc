import sys
import tempfile
import unittest
from dataclasses import replace
from pathlib import Path
from unittest import mock

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from squadform.core import formation_config  # noqa: E402
from squadform.core.formation_config import (  # noqa: E402
    clear_formation_config_cache,
    get_formation_config,
    get_formation_value,
)


class FormationConfigTests(unittest.TestCase):
    def tearDown(self):
        clear_formation_config_cache()

    def test_loader_and_value_lookup(self):
        config = get_formation_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_formation_value("scoring.diversity.breadth_weight"), 0.5)
        self.assertEqual(get_formation_value("formation.max_participants"), 5000)
        self.assertEqual(get_formation_value("formation.default_formation_type"), "diverse")

    def test_missing_keys_return_default(self):
        self.assertEqual(get_formation_value("formation.nope", 7), 7)
        self.assertEqual(get_formation_value("scoring.diversity.breadth_weight.deeper", "x"), "x")
        self.assertIsNone(get_formation_value(""))

    def test_override_path_and_invalid_documents(self):
        with tempfile.TemporaryDirectory() as tmp:
            custom = Path(tmp) / "formation.yaml"
            custom.write_text("formation:\n  max_participants: 12\n", encoding="utf-8")
            patched = replace(formation_config.settings, formation_config_path=str(custom))
            with mock.patch.object(formation_config, "settings", patched):
                clear_formation_config_cache()
                self.assertEqual(get_formation_value("formation.max_participants"), 12)

                custom.write_text("- just\n- a list\n", encoding="utf-8")
                clear_formation_config_cache()
                with self.assertRaises(RuntimeError):
                    get_formation_config()

            missing = replace(formation_config.settings, formation_config_path=str(Path(tmp) / "absent.yaml"))
            with mock.patch.object(formation_config, "settings", missing):
                clear_formation_config_cache()
                with self.assertRaises(RuntimeError):
                    get_formation_config()


if __name__ == "__main__":
    unittest.main()
