import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import ffmpeg

from videolib.thumbnails import ThumbnailError, ThumbnailGenerator, thumbnail_key


class TestThumbnailGenerator(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.cache_dir = Path(self.test_dir) / "thumbs"
        self.generator = ThumbnailGenerator(str(self.cache_dir), "/opt/ffmpeg/bin/ffmpeg", "/opt/ffmpeg/bin/ffprobe")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def fake_run(self, video_id):
        out = self.generator.cache_path(video_id)
        tmp = out.with_name(out.stem + ".tmp.jpg")

        def run(**kwargs):
            tmp.write_bytes(b"\xff\xd8jpeg")
        return run

    @patch('videolib.thumbnails.ffmpeg')
    def test_generates_and_caches(self, mock_ffmpeg):
        mock_ffmpeg.Error = ffmpeg.Error
        mock_ffmpeg.probe.return_value = {"format": {"duration": "50.0"}}
        chain = mock_ffmpeg.input.return_value.filter.return_value.output.return_value.overwrite_output.return_value
        chain.run.side_effect = self.fake_run("vid")

        path = self.generator.get("vid", "/videos/clip.mp4")

        self.assertEqual(path, self.cache_dir / f"{thumbnail_key('vid')}.jpg")
        self.assertTrue(path.exists())
        mock_ffmpeg.input.assert_called_once_with("/videos/clip.mp4", ss=5.0)
        mock_ffmpeg.probe.assert_called_once_with("/videos/clip.mp4", cmd="/opt/ffmpeg/bin/ffprobe")
        chain.run.assert_called_once_with(cmd="/opt/ffmpeg/bin/ffmpeg", quiet=True)

        # second call is served from disk
        self.generator.get("vid", "/videos/clip.mp4")
        self.assertEqual(mock_ffmpeg.input.call_count, 1)

    @patch('videolib.thumbnails.ffmpeg')
    def test_seek_time(self, mock_ffmpeg):
        mock_ffmpeg.Error = ffmpeg.Error
        mock_ffmpeg.probe.return_value = {"format": {"duration": "3600"}}
        self.assertEqual(self.generator.seek_time("a.mp4"), 10.0)

        mock_ffmpeg.probe.return_value = {"format": {}}
        self.assertEqual(self.generator.seek_time("a.mp4"), 1.0)

        mock_ffmpeg.probe.side_effect = ffmpeg.Error("ffprobe", b"", b"invalid data")
        self.assertEqual(self.generator.seek_time("a.mp4"), 1.0)

    @patch('videolib.thumbnails.ffmpeg')
    def test_ffmpeg_failure_raises(self, mock_ffmpeg):
        mock_ffmpeg.Error = ffmpeg.Error
        mock_ffmpeg.probe.return_value = {"format": {"duration": "20"}}
        chain = mock_ffmpeg.input.return_value.filter.return_value.output.return_value.overwrite_output.return_value

        chain.run.side_effect = ffmpeg.Error("ffmpeg", b"", b"boom")
        with self.assertRaises(ThumbnailError):
            self.generator.get("vid", "/videos/clip.mp4")

        chain.run.side_effect = FileNotFoundError("ffmpeg")
        with self.assertRaises(ThumbnailError):
            self.generator.get("vid", "/videos/clip.mp4")

        # ffmpeg ran but wrote nothing
        chain.run.side_effect = None
        with self.assertRaises(ThumbnailError):
            self.generator.get("vid", "/videos/clip.mp4")

        self.assertFalse(self.generator.cache_path("vid").exists())


if __name__ == '__main__':
    unittest.main()
