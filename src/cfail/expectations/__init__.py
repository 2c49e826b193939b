from .errors import ExpectationErrorCode, ExpectationParseError, ExpectationParseErrorDetail
from .models import CodeMatcher, Matcher, Pattern, TestExpectation, TextMatcher
from .parser import load_expectation, parse_expectations

__all__ = [
    "CodeMatcher",
    "ExpectationErrorCode",
    "ExpectationParseError",
    "ExpectationParseErrorDetail",
    "Matcher",
    "Pattern",
    "TestExpectation",
    "TextMatcher",
    "load_expectation",
    "parse_expectations",
]
