from critic.services.extraction import MetadataResult
from critic.services.prompts import build_system_prompt, build_user_prompt


def test_system_prompt_requires_structured_format():
    prompt = build_system_prompt()
    assert "witty" in prompt
    assert "JSON format" in prompt


def test_user_prompt_includes_mode_bluntness_and_content():
    prompt = build_user_prompt("music", "A lo-fi beat", 7, MetadataResult.no_data())

    assert "Mode: music" in prompt
    assert "Bluntness Meter: 7/10" in prompt
    assert "Content (90% weight):\nA lo-fi beat" in prompt
    assert "Metadata (10% weight)" not in prompt
    for label in ("Expert's Advice", "Intermediate Gaps", "Rookie Concepts"):
        assert label in prompt
    assert "3 sentences per section" in prompt


def test_user_prompt_includes_metadata_when_present():
    metadata = MetadataResult.present("Title: Song, Artist: Band, Album: Unknown, Duration: 3s")
    prompt = build_user_prompt("music", "desc", 5, metadata)

    assert "Metadata (10% weight):\nTitle: Song, Artist: Band" in prompt
    assert prompt.index("Content (90% weight)") < prompt.index("Metadata (10% weight)")


def test_user_prompt_skips_failed_metadata():
    metadata = MetadataResult.failed(ValueError("bad header"))
    prompt = build_user_prompt("art", "desc", 12, metadata)

    assert "Metadata" not in prompt
    assert "Bluntness Meter: 12/10" in prompt
