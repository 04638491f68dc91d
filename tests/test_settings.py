import os
import unittest
from unittest.mock import patch

from videolib.settings import env_path


class TestEnvPath(unittest.TestCase):
    def test_home_is_expanded(self):
        with patch.dict(os.environ, {"VIDEOLIB_THUMBNAIL_DIR": "~/.videolib/thumbnails"}):
            value = env_path("VIDEOLIB_THUMBNAIL_DIR")
        self.assertEqual(value, os.path.join(os.path.expanduser("~"), ".videolib", "thumbnails"))
        self.assertNotIn("~", value)

    def test_default_is_expanded(self):
        with patch.dict(os.environ, {}, clear=True):
            os.environ["HOME"] = "/home/someone"
            self.assertEqual(env_path("VIDEOLIB_DATA_DIR", "~/.videolib"), "/home/someone/.videolib")

    def test_unset_without_default(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(env_path("VIDEOLIB_THUMBNAIL_DIR"))


if __name__ == '__main__':
    unittest.main()
