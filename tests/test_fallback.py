import pytest

from blogstudio.generation.fallback import TONE_STYLES, generate_fallback_content
from blogstudio.generation.models import GenerateRequest


#============================================
@pytest.mark.parametrize("tone", sorted(TONE_STYLES))
@pytest.mark.parametrize("length", ["short", "medium", "long"])
def test_fallback_contains_title_for_every_configuration(tone: str, length: str) -> None:
    """
    Every valid configuration yields non-empty content holding the literal title.
    """
    request = GenerateRequest(title="Rust & Friends <2024>", tone=tone, length=length)
    result = generate_fallback_content(request)
    assert result.content.strip()
    assert "Rust & Friends <2024>" in result.content
    assert TONE_STYLES[tone] in result.content
    assert result.is_fallback is True
    assert result.title == "Rust & Friends <2024>"


#============================================
def test_fallback_is_deterministic() -> None:
    request = GenerateRequest(title="Home Brewing", topic="beer", tone="casual", length="long")
    first = generate_fallback_content(request)
    second = generate_fallback_content(request)
    assert first.content == second.content
    assert first.summary == second.summary


#============================================
def test_fallback_subject_prefers_topic() -> None:
    """
    The topic fills the subject placeholders when given.
    """
    result = generate_fallback_content(GenerateRequest(title="Home Brewing", topic="craft beer"))
    assert "comprehensive guide on craft beer." in result.content
    assert "mastering craft beer requires" in result.content
    assert result.summary.startswith("This comprehensive guide explores craft beer,")


#============================================
def test_fallback_subject_defaults_to_lowercased_title() -> None:
    result = generate_fallback_content(GenerateRequest(title="Home Brewing", topic="  "))
    assert "<h1>Home Brewing</h1>" in result.content
    assert "comprehensive guide on home brewing." in result.content
    assert "explores home brewing," in result.summary


#============================================
def test_fallback_has_every_section() -> None:
    content = generate_fallback_content(GenerateRequest(title="Sections")).content
    for heading in (
        "Understanding the Basics",
        "Why This Matters",
        "Best Practices and Strategies",
        "Common Challenges and Solutions",
        "Looking Ahead",
        "Conclusion",
    ):
        assert f"<h2>{heading}</h2>" in content
