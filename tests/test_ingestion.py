import os
import tempfile
import unittest
from pathlib import Path

from conllx_utils.errors import CorpusParseError
from conllx_utils.ingestion.features import parse_features, render_features, with_flag
from conllx_utils.ingestion.merge import merge_corpora
from conllx_utils.ingestion.reader import CorpusReader, parse_conllx, read_sentences
from conllx_utils.ingestion.writer import SentenceWriter, serialize_sentence

from helpers import conllx

SENTENCE = conllx(
    "1 The the DT DT _ 2 NMOD _ _",
    "2 dog dog NN NN case:nom|number:sg|proper 3 SBJ 3 SBJ",
    "3 barks bark VB VBZ _ 0 ROOT 0 ROOT",
    comments=["sent_id = 1"],
)


class TestFeatures(unittest.TestCase):
    def test_parse(self):
        self.assertEqual(parse_features("case:nom|number:sg|proper"),
                         [("case", "nom"), ("number", "sg"), ("proper", None)])
        self.assertIsNone(parse_features("_"))
        self.assertIsNone(parse_features(""))

    def test_value_with_separator(self):
        self.assertEqual(parse_features("ref:a:b"), [("ref", "a:b")])

    def test_duplicate_names_kept(self):
        self.assertEqual(parse_features("ref:1|ref:2"), [("ref", "1"), ("ref", "2")])

    def test_render_is_inverse(self):
        for value in ("case:nom|number:sg|proper", "flag", "ref:a:b", "empty:", "ref:1|ref:2"):
            self.assertEqual(render_features(parse_features(value)), value)
        self.assertEqual(render_features(None), "_")
        self.assertEqual(render_features([]), "_")

    def test_custom_separator(self):
        features = parse_features("Case=Nom|Typo", separator="=")
        self.assertEqual(features, [("Case", "Nom"), ("Typo", None)])
        self.assertEqual(render_features(features, separator="="), "Case=Nom|Typo")

    def test_with_flag_copies(self):
        original = [("case", "nom")]
        updated = with_flag(original, "MATCH")
        self.assertEqual(original, [("case", "nom")])
        self.assertEqual(updated, [("case", "nom"), ("MATCH", None)])
        self.assertEqual(with_flag(None, "MATCH"), [("MATCH", None)])

    def test_with_flag_resets_every_occurrence(self):
        self.assertEqual(with_flag([("ref", "1"), ("case", "nom"), ("ref", "2")], "ref"),
                         [("ref", None), ("case", "nom"), ("ref", None)])


class TestReader(unittest.TestCase):
    def test_columns(self):
        sent = parse_conllx(SENTENCE)[0]
        token = sent[1]

        self.assertEqual(sent.metadata["sent_id"], "1")
        self.assertEqual(token["id"], 2)
        self.assertEqual(token["cpostag"], "NN")
        self.assertEqual(token["postag"], "NN")
        # HEAD хранится строкой, чтобы не терять исходное написание
        self.assertEqual(token["head"], "3")
        self.assertEqual(token["deprel"], "SBJ")
        self.assertEqual(token["phead"], "3")
        self.assertEqual(token["pdeprel"], "SBJ")
        self.assertIsNone(sent[0]["phead"])

    def test_round_trip(self):
        sent = parse_conllx(SENTENCE)[0]
        self.assertEqual(serialize_sentence(sent), SENTENCE)

    def test_bare_comment_preserved(self):
        text = conllx("1 dog _ _ _ _ _ _ _ _", comments=["converted from treebank"])
        self.assertEqual(serialize_sentence(parse_conllx(text)[0]), text)

    def test_parse_error_reports_sentence_number(self):
        text = conllx("1 dog _ _ _ _ _ _ _ _") + conllx("x cat _ _ _ _ _ _ _ _")
        with self.assertRaises(CorpusParseError) as ctx:
            parse_conllx(text)
        self.assertEqual(ctx.exception.source, "<string>")
        self.assertEqual(ctx.exception.sentence_number, 2)

    def test_short_line_rejected(self):
        with self.assertRaises(CorpusParseError) as ctx:
            parse_conllx("1\tdog\tdog\tNN\n\n")
        self.assertIn("Expected 10 columns, got 4", str(ctx.exception))

    def test_extra_column_rejected(self):
        with self.assertRaises(CorpusParseError) as ctx:
            parse_conllx(conllx("1 dog _ _ _ _ 0 ROOT _ _ extra"))
        self.assertIn("got 11", str(ctx.exception))

    def test_double_space_in_field_rejected(self):
        # conllu делит строку и по двум пробелам, колонки бы сдвинулись
        text = "1\tNew  York\t_\t_\t_\t_\t0\tROOT\t_\t_\n\n"
        with self.assertRaises(CorpusParseError) as ctx:
            parse_conllx(text)
        self.assertEqual(ctx.exception.sentence_number, 1)

    def test_lazy_reading(self):
        # Ошибка во втором предложении не мешает получить первое
        text = conllx("1 dog _ _ _ _ _ _ _ _") + "garbage\n\n"
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.conll"
            path.write_text(text, encoding="utf-8")

            with CorpusReader(path) as reader:
                sentences = iter(reader)
                self.assertEqual(next(sentences)[0]["form"], "dog")
                with self.assertRaises(CorpusParseError) as ctx:
                    next(sentences)
        self.assertEqual(ctx.exception.source, str(path))

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            with CorpusReader("/nonexistent/corpus.conll"):
                pass

    def test_iterate_outside_context(self):
        with self.assertRaises(RuntimeError):
            iter(CorpusReader("corpus.conll"))


class TestWriterAndMerge(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.inputs = []
        for i, word in enumerate(("dogs", "cats", "birds")):
            path = self.dir / f"part-{i}.conll"
            path.write_text(conllx(f"1 {word} {word[:-1]} NN NNS number:pl 0 ROOT _ _"), encoding="utf-8")
            self.inputs.append(path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_writer_counts_sentences(self):
        output = self.dir / "out.conll"
        with SentenceWriter(output) as writer:
            for sent in read_sentences(self.inputs[0]):
                writer.write(sent)

        self.assertEqual(writer.count, 1)
        self.assertEqual(output.read_text(encoding="utf-8"), self.inputs[0].read_text(encoding="utf-8"))

    def test_merge_is_byte_identical_concatenation(self):
        output = self.dir / "merged.conll"
        with SentenceWriter(output) as writer:
            for sent in merge_corpora(self.inputs):
                writer.write(sent)

        expected = "".join(path.read_text(encoding="utf-8") for path in self.inputs)
        self.assertEqual(output.read_text(encoding="utf-8"), expected)
        self.assertEqual(writer.count, 3)

    def test_merge_keeps_repeated_features(self):
        repeated = self.dir / "repeated.conll"
        repeated.write_text(conllx("1 it it PRP PRP ref:1|ref:2 0 ROOT _ _"), encoding="utf-8")
        output = self.dir / "merged.conll"
        with SentenceWriter(output) as writer:
            for sent in merge_corpora([repeated, self.inputs[0]]):
                writer.write(sent)

        expected = repeated.read_text(encoding="utf-8") + self.inputs[0].read_text(encoding="utf-8")
        self.assertEqual(output.read_text(encoding="utf-8"), expected)

    def test_merge_opens_files_in_order(self):
        missing = self.dir / "missing.conll"
        sentences = merge_corpora([self.inputs[0], missing])

        self.assertEqual(next(sentences)[0]["form"], "dogs")
        with self.assertRaises(FileNotFoundError):
            next(sentences)
        self.assertFalse(os.path.exists(missing))


if __name__ == '__main__':
    unittest.main()
