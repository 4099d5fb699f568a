from dep_auditor.core.classify import classify
from dep_auditor.core.models import ConfigKind, Declaration, Recommendation, UsageCategory
from dep_auditor.utils.formatting import (
    category_markup,
    format_confidence,
    format_recommendation,
    format_size,
    format_verdict,
)


def test_format_size() -> None:
    assert format_size(None) == "N/A"
    assert format_size(0.1) == "102 KB"
    assert format_size(4.5) == "4.5 MB"


def test_format_confidence() -> None:
    assert format_confidence(None) == "N/A"
    assert format_confidence(75) == "75%"


def test_format_recommendation() -> None:
    assert format_recommendation(None) == "-"
    assert format_recommendation(Recommendation.KEEP) == "Keep"


def test_category_markup() -> None:
    assert category_markup(UsageCategory.LIKELY_UNUSED) == "[bold red]Likely unused[/bold red]"


def test_format_verdict() -> None:
    declaration = Declaration(
        group="com.google.guava",
        artifact="guava",
        version="33.0.0-jre",
        line_number=9,
        raw_line='implementation("com.google.guava:guava:33.0.0-jre")',
        config_kind=ConfigKind.IMPLEMENTATION,
    )
    verdict = format_verdict(classify(declaration))
    assert verdict == "line 9: com.google.guava:guava:33.0.0-jre -> Likely unused (75%, ~4.5 MB) remove?"
