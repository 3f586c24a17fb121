import json
import pytest

from helpers.vocabulary import Vocabulary, DEFAULT_VOCABULARY, load_vocabulary


def test_header_labels_case_insensitive():
    assert DEFAULT_VOCABULARY.is_header_label(" CV ")
    assert DEFAULT_VOCABULARY.is_header_label("Curriculum Vitae")
    assert not DEFAULT_VOCABULARY.is_header_label("Curriculum Vitae of Jane")


def test_location_indicators_are_whole_words():
    assert DEFAULT_VOCABULARY.mentions_location("221B Baker Street")
    assert DEFAULT_VOCABULARY.mentions_location("PO  Box 1234")
    assert DEFAULT_VOCABULARY.mentions_location("Abu Dhabi")
    assert not DEFAULT_VOCABULARY.mentions_location("Felicity Jones")


def test_cities():
    assert DEFAULT_VOCABULARY.mentions_city("Remote - Karachi")
    assert not DEFAULT_VOCABULARY.mentions_city("123 Main Street")


def test_extended_dedupes_and_lowercases():
    vocab = DEFAULT_VOCABULARY.extended({"skills": ["Django", "React"]})
    assert "django" in vocab.skills
    assert vocab.skills.count("react") == 1
    # original untouched
    assert "django" not in DEFAULT_VOCABULARY.skills


def test_extended_rejects_unknown_table():
    with pytest.raises(ValueError):
        DEFAULT_VOCABULARY.extended({"colours": ["red"]})


def test_load_vocabulary(tmp_path):
    path = tmp_path / "vocab.json"
    path.write_text(json.dumps({"skills": ["django"], "cities": ["Nairobi"]}))
    vocab = load_vocabulary(str(path))
    assert "django" in vocab.skills
    assert "react" in vocab.skills
    assert vocab.mentions_city("Nairobi, Kenya")


def test_load_vocabulary_bad_shape(tmp_path):
    path = tmp_path / "vocab.json"
    path.write_text(json.dumps({"skills": "django"}))
    with pytest.raises(ValueError):
        load_vocabulary(str(path))


def test_custom_vocabulary_is_independent():
    vocab = Vocabulary(skills=("django",), cities=("nairobi",))
    assert vocab.skills == ("django",)
    assert not vocab.mentions_city("Dubai")


def test_broken_vocabulary_file_falls_back_to_defaults(tmp_path, monkeypatch):
    from helpers import vocabulary
    from helpers.field_extraction import extract_fields

    path = tmp_path / "vocab.json"
    path.write_text("{not json")
    monkeypatch.setattr(vocabulary, "VOCAB_PATH", str(path))
    monkeypatch.setattr(vocabulary, "_loaded", None)

    assert vocabulary.get_vocabulary() is DEFAULT_VOCABULARY
    assert extract_fields("Built with React").skills == ("react",)
    # loaded once, not retried on every call
    assert vocabulary.get_vocabulary() is vocabulary._loaded
