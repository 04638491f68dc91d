import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path

from videolib.folders import FolderConfig


class TestFolderConfig(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.data_dir = os.path.join(self.test_dir, "data")
        self.videos = os.path.join(self.test_dir, "videos")
        os.makedirs(self.videos)
        self.config = FolderConfig(self.data_dir)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_ensure_creates_empty_config(self):
        self.config.ensure()
        with open(self.config.config_path) as f:
            self.assertEqual(json.load(f), {"folders": []})

    def test_add_is_idempotent(self):
        self.config.add(self.videos)
        self.config.add(self.videos + os.sep)
        self.assertEqual(self.config.load(), [self.videos])

    def test_order_is_preserved(self):
        other = os.path.join(self.test_dir, "more")
        os.makedirs(other)
        self.config.add(other)
        self.config.add(self.videos)
        self.assertEqual(FolderConfig(self.data_dir).load(), [other, self.videos])

    def test_remove_keeps_files(self):
        video = Path(self.videos) / "clip.mp4"
        video.write_bytes(b"data")
        self.config.add(self.videos)

        self.assertEqual(self.config.remove(self.videos), [])
        self.assertEqual(self.config.load(), [])
        self.assertTrue(video.exists())

    def test_corrupt_file_reads_as_empty(self):
        os.makedirs(self.data_dir)
        self.config.config_path.write_text("{not json")
        self.assertEqual(self.config.load(), [])

    def test_duplicates_on_disk_are_collapsed(self):
        os.makedirs(self.data_dir)
        self.config.config_path.write_text(json.dumps({"folders": ["/a", "/b", "/a", 3]}))
        self.assertEqual(self.config.load(), ["/a", "/b"])


if __name__ == '__main__':
    unittest.main()
