import unittest

from videolib.embed import bulk_embed_codes, embed_code
from videolib.subtitles import srt_to_vtt


class TestEmbed(unittest.TestCase):
    def test_embed_code(self):
        code = embed_code("http://host:3001/", "abc", "My Video")
        self.assertEqual(
            code,
            '<iframe src="http://host:3001/embed/abc" width="640" height="360" frameborder="0" '
            'allow="autoplay; fullscreen; picture-in-picture" allowfullscreen title="My Video"></iframe>',
        )

    def test_title_is_escaped(self):
        code = embed_code("http://h", "abc", 'He said "hi" <b>')
        self.assertIn('title="He said &quot;hi&quot; &lt;b&gt;"', code)

    def test_bulk(self):
        videos = [{"id": "a", "title": "One"}, {"id": "b", "title": "Two"}]
        text = bulk_embed_codes("http://h", videos)
        self.assertTrue(text.startswith("<!-- One -->\n<iframe src=\"http://h/embed/a\" width=\"1920\" height=\"1080\""))
        self.assertIn("<!-- Two -->\n", text)
        self.assertEqual(text.count("<iframe"), 2)


class TestSrtToVtt(unittest.TestCase):
    def test_converts_timestamps(self):
        srt = "\ufeff1\r\n00:00:01,000 --> 00:00:02,500\r\nHello, world\r\n\r\n2\r\n00:00:03,000 --> 00:00:04,000\r\nBye\r\n"
        vtt = srt_to_vtt(srt)
        self.assertTrue(vtt.startswith("WEBVTT\n\n1\n"))
        self.assertIn("00:00:01.000 --> 00:00:02.500", vtt)
        # commas in text lines are untouched
        self.assertIn("Hello, world", vtt)
        self.assertNotIn("\r", vtt)


if __name__ == '__main__':
    unittest.main()
