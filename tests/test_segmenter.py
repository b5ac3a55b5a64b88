import unittest

from relay.bot.segmenter import SentenceSegmenter, split_sentences


class TestSplitSentences(unittest.TestCase):

    def test_text_without_delimiter_is_kept_as_buffer(self):
        for text in ["", "Hello there", "こんにちは", "元気です!", "what? no"]:
            self.assertEqual(split_sentences("", text), ([], text))

    def test_empty_incoming_returns_buffer_unchanged(self):
        self.assertEqual(split_sentences("途中の", ""), ([], "途中の"))

    def test_split_after_each_delimiter(self):
        sentences, buffer = split_sentences("", "こんにちは。元気？はい、")
        self.assertEqual(sentences, ["こんにちは。", "元気？", "はい、"])
        self.assertEqual(buffer, "")

    def test_trailing_text_becomes_buffer(self):
        sentences, buffer = split_sentences("", "こんにちは。元気")
        self.assertEqual(sentences, ["こんにちは。"])
        self.assertEqual(buffer, "元気")

    def test_buffer_is_prepended(self):
        sentences, buffer = split_sentences("こんに", "ちは。")
        self.assertEqual(sentences, ["こんにちは。"])
        self.assertEqual(buffer, "")

    def test_consecutive_delimiters_give_non_empty_pieces(self):
        sentences, buffer = split_sentences("", "えっ？？本当。")
        self.assertEqual(sentences, ["えっ？", "？", "本当。"])
        self.assertEqual(buffer, "")

    def test_ascii_punctuation_is_not_a_boundary(self):
        self.assertEqual(split_sentences("", "Hi. How are you?"), ([], "Hi. How are you?"))

    def test_split_points_do_not_change_the_result(self):
        text = "こんにちは。今日は、いい天気ですね？散歩しましょう。"
        expected, _ = split_sentences("", text)

        for step in range(1, 6):
            buffer = ""
            collected = []
            for start in range(0, len(text), step):
                sentences, buffer = split_sentences(buffer, text[start:start + step])
                collected.extend(sentences)
            self.assertEqual(collected, expected)
            self.assertEqual(buffer, "")


class TestSentenceSegmenter(unittest.TestCase):

    def setUp(self):
        self.segmenter = SentenceSegmenter()

    def test_feed_and_flush(self):
        self.assertEqual(self.segmenter.feed("こん"), [])
        self.assertEqual(self.segmenter.feed("にちは。元"), ["こんにちは。"])
        self.assertEqual(self.segmenter.feed("気"), [])
        self.assertEqual(self.segmenter.flush(), "元気")
        self.assertEqual(self.segmenter.buffer, "")

    def test_flush_empty(self):
        self.segmenter.feed("はい。")
        self.assertEqual(self.segmenter.flush(), "")

    def test_concatenation_reconstructs_text(self):
        pieces = ["今日", "は晴れ", "。明日は", "雨、", "かな？", "多分"]
        emitted = []
        for piece in pieces:
            emitted.extend(self.segmenter.feed(piece))
        emitted.append(self.segmenter.flush())
        self.assertEqual("".join(emitted), "".join(pieces))


if __name__ == "__main__":
    unittest.main()
