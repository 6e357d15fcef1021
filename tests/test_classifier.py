"""Tests for business card text classification."""

import pytest

from lead_card.extractor import HeuristicExtractor, classify
from lead_card.extractor.heuristic import EMAIL_PATTERN, PHONE_PATTERN
from lead_card.models.lead import CardFields, LeadSource


class TestClassifyScenarios:
    """End-to-end examples of typical OCR output."""

    def test_full_card(self):
        """Test name, email and phone are all picked from a typical card."""
        fields = classify(
            "John Doe\nSenior Engineer\njohn.doe@example.com\n+1 415-555-0192"
        )
        assert fields.name == "John Doe"
        assert fields.email == "john.doe@example.com"
        assert fields.phone == "+1 415-555-0192"

    def test_empty_input(self):
        """Test empty input yields no fields."""
        assert classify("") == CardFields()

    def test_long_digit_run_and_noise(self):
        """Test a 14-digit run is taken as phone, never as name, and short lines are noise."""
        fields = classify("12345678901234\nAB\nCD")
        assert fields.name is None
        assert fields.email is None
        # The country-code and area-code groups make 14 digits a phone match
        assert fields.phone == "12345678901234"

    def test_second_email_ignored(self):
        """Test only the first email is kept."""
        fields = classify("Jane Smith\njane@firm.co\njane@alt.co")
        assert fields.name == "Jane Smith"
        assert fields.email == "jane@firm.co"
        assert fields.phone is None


class TestClassifyRules:
    """Test individual classification rules."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\n", "ab\n  x \nCD", " \t\n12"])
    def test_no_usable_lines(self, text):
        """Test input with no line of 3+ characters yields all None."""
        fields = classify(text)
        assert fields.name is None
        assert fields.email is None
        assert fields.phone is None
        assert fields.is_empty

    def test_three_character_line_is_kept(self):
        """Test a line of exactly three characters is eligible."""
        assert classify("Ann").name == "Ann"

    def test_lines_are_trimmed(self):
        """Test surrounding whitespace and carriage returns are stripped."""
        fields = classify("   John Doe   \r\n\tjohn@example.com\r\n")
        assert fields.name == "John Doe"
        assert fields.email == "john@example.com"

    def test_email_substring_extracted(self):
        """Test only the matched address is returned, not the whole line."""
        fields = classify("Email: j.doe+cards@mail.example.org (work)")
        assert fields.email == "j.doe+cards@mail.example.org"

    def test_mixed_case_email(self):
        """Test upper-case letters are accepted in emails."""
        assert classify("J.Doe@Example.COM").email == "J.Doe@Example.COM"

    def test_email_line_not_reused(self):
        """Test a line that gives the email is not considered for phone or name."""
        fields = classify("Jane jane@firm.co 415-555-0192")
        assert fields.email == "jane@firm.co"
        assert fields.phone is None
        assert fields.name is None

    def test_phone_substring_extracted(self):
        """Test only the matched number is returned."""
        assert classify("Tel: (415) 555-0192 ext").phone == "(415) 555-0192"

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("555-0192", "555-0192"),
            ("555.0192", "555.0192"),
            ("5550192", "5550192"),
            ("415 555 0192", "415 555 0192"),
            ("+1 (415) 555-0192", "+1 (415) 555-0192"),
            ("+44 20 7946 0958", "7946 0958"),
        ],
    )
    def test_phone_formats(self, line, expected):
        """Test the phone pattern accepts several separator styles."""
        assert classify(line).phone == expected

    def test_first_phone_wins(self):
        """Test only the first phone number in input order is kept."""
        fields = classify("Mobile 415-555-0192\nOffice 650-555-0100")
        assert fields.phone == "415-555-0192"

    def test_phone_with_non_breaking_spaces(self):
        """Test NBSP separators from OCR output still read as a phone."""
        fields = classify("415\xa0555\xa00192")
        assert fields.phone == "415\xa0555\xa00192"
        assert fields.name is None

    def test_non_ascii_digits_are_not_a_phone(self):
        """Test only ASCII digits count towards a phone number."""
        fields = classify("٤١٥٥٥٥٠١٩٢")
        assert fields.phone is None

    def test_name_rejects_digit_run(self):
        """Test a line with 5 consecutive digits never becomes the name."""
        fields = classify("San Francisco CA 94105")
        assert fields.name is None
        assert fields.phone is None

    def test_name_rejects_at_sign(self):
        """Test a line containing @ never becomes the name."""
        fields = classify("@johndoe\nJohn Doe")
        assert fields.name == "John Doe"

    def test_name_allows_short_digit_groups(self):
        """Test a line with fewer than 5 consecutive digits can be the name."""
        assert classify("Suite 1200").name == "Suite 1200"

    def test_first_name_wins(self):
        """Test the first qualifying line is the name."""
        fields = classify("Acme Corp\nJohn Doe")
        assert fields.name == "Acme Corp"

    def test_order_dependent(self):
        """Test fields come from whichever qualifying line is met first."""
        fields = classify("john@example.com\n415-555-0192\nJohn Doe\nJane Roe")
        assert fields == CardFields(
            name="John Doe", email="john@example.com", phone="415-555-0192"
        )

    def test_idempotent(self):
        """Test classifying the same text twice gives the same result."""
        text = "John Doe\nACME\njohn@acme.io\n415.555.0192\n12345"
        assert classify(text) == classify(text)

    def test_adversarial_input_does_not_raise(self):
        """Test odd input degrades to None fields."""
        fields = classify("@@@@\n" + "9" * 5000 + "\n@x@y.@")
        assert fields.name is None
        assert fields.email is None

    def test_source_is_ocr(self):
        """Test extracted fields are tagged as OCR."""
        assert classify("John Doe").source == LeadSource.OCR


class TestPatterns:
    """Test the raw patterns."""

    @pytest.mark.parametrize("text", ["a@b.co", "first.last@sub.domain.com", "x_y%z@q-r.io"])
    def test_email_matches(self, text):
        """Test valid email shapes match."""
        assert EMAIL_PATTERN.search(text).group(0) == text

    @pytest.mark.parametrize("text", ["john@", "@example.com", "john@example", "john@example.c"])
    def test_email_rejects(self, text):
        """Test incomplete addresses do not match."""
        assert EMAIL_PATTERN.search(text) is None

    @pytest.mark.parametrize("text", ["123456", "12-34-56", "phone"])
    def test_phone_rejects(self, text):
        """Test fewer than seven digits do not match."""
        assert PHONE_PATTERN.search(text) is None


class TestHeuristicExtractor:
    """Test the Extractor wrapper."""

    def test_name(self):
        """Test extractor name."""
        assert HeuristicExtractor().name == "heuristic"

    def test_extract_delegates_to_classify(self):
        """Test extract returns the same fields as classify."""
        text = "John Doe\njohn@example.com"
        assert HeuristicExtractor().extract(text) == classify(text)
