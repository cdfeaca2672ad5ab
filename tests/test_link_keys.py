import pytest

from Processing.link_keys import (
    KEY_SHAPES,
    SEMESTER_SHORTCUTS,
    SEMESTERS,
    TEAMS,
    Workshop,
    is_valid_semester,
    is_valid_team,
    match_key,
    normalize_semester,
    parse_key,
)

LINK = "https://example.com/w"

@pytest.mark.parametrize("key, shape, expected", [
    ("dev/git-intro-f24", "team/workshop-sem", ("dev", "git-intro", "fa24")),
    ("dev/f24-git-intro", "team/sem-workshop", ("dev", "git-intro", "fa24")),
    ("ai-neural-nets-sp25", "team-workshop-sem", ("ai", "neural-nets", "sp25")),
    ("oss-fa25-first-pr", "team-sem-workshop", ("oss", "first-pr", "fa25")),
    ("s25-algo-dp+graphs", "sem-team-workshop", ("algo", "dp+graphs", "sp25")),
])
def test_each_shape_parses(key, shape, expected):
    found_shape, _ = match_key(key)
    assert found_shape.label == shape

    w = parse_key(key, LINK)
    assert (w.team, w.name, w.semester) == expected
    assert w.link == LINK

def test_shapes_are_in_priority_order():
    assert [s.label for s in KEY_SHAPES] == [
        "team/workshop-sem",
        "team/sem-workshop",
        "team-workshop-sem",
        "team-sem-workshop",
        "sem-team-workshop",
    ]

def test_ambiguous_key_takes_first_matching_shape():
    # Matches both team-workshop-sem and team-sem-workshop
    w = parse_key("ai-f24-f25", LINK)
    assert (w.team, w.name, w.semester) == ("ai", "f24", "fa25")

    # Matches both slash shapes
    w = parse_key("dev/f24-s25", LINK)
    assert (w.team, w.name, w.semester) == ("dev", "f24", "sp25")

def test_unparseable_key_warns(capsys):
    assert parse_key("not a key at all", LINK) is None
    assert "WARN: Could not parse key: not a key at all" in capsys.readouterr().err

def test_semester_token_needs_two_digits():
    assert parse_key("dev/git-intro-f2024", LINK) is None

def test_parse_does_not_validate():
    w = parse_key("robots/arm-w23", LINK)
    assert (w.team, w.semester) == ("robots", "w23")

def test_non_ascii_word_characters_do_not_match():
    assert parse_key("dév/intro-f24", LINK) is None

@pytest.mark.parametrize("short, full", sorted(SEMESTER_SHORTCUTS.items()))
def test_shortcuts_normalize(short, full):
    assert normalize_semester(short) == full
    assert normalize_semester(short.upper()) == full

@pytest.mark.parametrize("token", list(SEMESTERS) + ["sp26", "w23"])
def test_normalize_is_idempotent(token):
    once = normalize_semester(token)
    assert normalize_semester(once) == once

def test_normalize_lowercases_unknown_tokens():
    assert normalize_semester("W23") == "w23"

def test_enumerations():
    assert len(TEAMS) == 9
    assert SEMESTERS == ("fa24", "sp25", "fa25")
    assert all(is_valid_team(t) for t in TEAMS)
    assert not is_valid_team("Dev")
    assert not is_valid_semester("sp26")

def test_workshop_is_frozen():
    w = Workshop(name="a", team="dev", semester="fa24", link=LINK)
    with pytest.raises(Exception):
        w.name = "b"

@pytest.mark.parametrize("key", ["dev/git-intro-f24\n", "dev-f24-git-intro\n", "f24-dev-git\r\n"])
def test_trailing_newline_is_not_a_key(key, capsys):
    assert parse_key(key, LINK) is None
    assert "Could not parse key" in capsys.readouterr().err
