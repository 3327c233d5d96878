import os
import json
import tempfile
import unittest
from neo2.settings import settings, Settings, IndexableNamespace


class SettingsTestCase(unittest.TestCase):
    def tearDown(self) -> None:
        settings.reset_settings_to_default()

    def test_defaults(self):
        self.assertEqual(3.0, settings.rpc.timeout)
        self.assertEqual([], settings.rpc.seedlist)
        self.assertEqual(0x17, settings.network.address_version)

    def test_indexable(self):
        self.assertIsInstance(settings.rpc, IndexableNamespace)
        self.assertEqual(settings.rpc.timeout, settings["rpc"]["timeout"])
        self.assertIn("seedlist", settings.rpc)
        self.assertNotIn("does_not_exist", settings.rpc)
        self.assertIsNone(settings.rpc.get("does_not_exist"))
        self.assertEqual(2, len(settings.rpc))

    def test_register(self):
        settings.register({"rpc": {"timeout": 10.0, "seedlist": ["http://seed1.example:10332"]}})
        self.assertEqual(10.0, settings.rpc.timeout)
        self.assertEqual(["http://seed1.example:10332"], settings.rpc.seedlist)

        settings.reset_settings_to_default()
        self.assertEqual(3.0, settings.rpc.timeout)

    def test_from_file(self):
        data = {
            "rpc": {"timeout": 5.0, "seedlist": ["http://seed2.example:10332"]},
            "network": {"address_version": 23},
        }
        fd, path = tempfile.mkstemp(suffix=".json")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(data, f)
            s = Settings.from_file(path)
        finally:
            os.remove(path)
        self.assertEqual(5.0, s.rpc.timeout)
        self.assertEqual(["http://seed2.example:10332"], s.rpc.seedlist)
        self.assertEqual(23, s.network.address_version)
