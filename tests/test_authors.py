"""Tests for author parsing and name helpers."""

import pytest

from quickcite.authors import (
    apa_name, initials, invert_name, is_corporate, last_name,
    natural_name, parse_authors, split_name,
)
from quickcite.models import AuthorInfo


class TestParseAuthors:

    @pytest.mark.parametrize("raw", [None, "", "   ", "Unknown Author", "unknown author"])
    def test_no_author(self, raw):
        info = parse_authors(raw)
        assert info == AuthorInfo((), True, 0)
        assert info.is_empty

    def test_single_person(self):
        info = parse_authors("Jane Doe")
        assert info.authors == ("Jane Doe",)
        assert info.count == 1
        assert not info.is_corporate

    def test_pre_inverted_single_author(self):
        info = parse_authors("Smith, John")
        assert info.count == 1
        assert info.authors == ("Smith, John",)

    def test_and(self):
        assert parse_authors("Jane Doe and John Roe").authors == ("Jane Doe", "John Roe")

    def test_ampersand(self):
        assert parse_authors("Jane Doe & John Roe").authors == ("Jane Doe", "John Roe")

    def test_comma_list(self):
        info = parse_authors("A, B, C, D")
        assert info.count == 4
        assert info.authors[0] == "A"

    def test_comma_list_of_full_names(self):
        assert parse_authors("Jane Doe, John Roe").count == 2

    def test_oxford_comma_with_inverted_first(self):
        info = parse_authors("Smith, John, and Mary Jones")
        assert info.authors == ("Smith, John", "Mary Jones")

    def test_semicolons(self):
        info = parse_authors("Doe, Jane; Roe, John")
        assert info.authors == ("Doe, Jane", "Roe, John")

    def test_leading_by_stripped(self):
        assert parse_authors("By Jane Doe").authors == ("Jane Doe",)

    @pytest.mark.parametrize("raw", [
        "World Health Organization",
        "Acme Inc.",
        "Stanford University",
        "EPA",
        "Reuters Staff",
    ])
    def test_corporate(self, raw):
        info = parse_authors(raw)
        assert info.is_corporate
        assert info.count == 1
        assert info.authors == (raw,)

    def test_corporate_keywords_are_whole_words(self):
        assert not is_corporate("Bruno Corpus")
        assert is_corporate("Google")

    def test_brand_name_inside_a_person_name(self):
        info = parse_authors("Fiona Apple")
        assert not info.is_corporate
        assert info.authors == ("Fiona Apple",)
        assert is_corporate("apple")

    def test_acronyms_are_case_sensitive(self):
        assert is_corporate("The WHO Secretariat")
        assert not is_corporate("Doctor Who")
        assert not is_corporate("Una Un")


class TestNameHelpers:

    def test_split_name(self):
        assert split_name("Jane Mary Doe") == ("Jane Mary", "Doe")
        assert split_name("Doe, Jane") == ("Jane", "Doe")
        assert split_name("Cher") == ("", "Cher")

    def test_invert_is_idempotent(self):
        assert invert_name("Jane Doe") == "Doe, Jane"
        assert invert_name("Doe, Jane") == "Doe, Jane"
        assert invert_name(invert_name("Jane Doe")) == "Doe, Jane"

    def test_natural_name(self):
        assert natural_name("Roe, John") == "John Roe"
        assert natural_name("John Roe") == "John Roe"

    def test_initials(self):
        assert initials("Jane Mary") == "J. M."
        assert initials("Jean-Paul") == "J.-P."

    def test_apa_name(self):
        assert apa_name("Jane Doe") == "Doe, J."
        assert apa_name("Smith, John") == "Smith, J."
        assert apa_name("Cher") == "Cher"

    def test_last_name(self):
        assert last_name("Jane Doe") == "Doe"
        assert last_name("Smith, John") == "Smith"
