"""Category 0: Parsing policy text into documents."""

import logging
from textwrap import dedent

import pytest
from pydantic import ValidationError

from path_authz import (
    Access,
    PolicyDocument,
    PolicyLoadError,
    Principal,
    PrincipalKind,
    RuleEntry,
    Section,
    load_policy,
    parse_policy,
)

SAMPLE = """\
[groups]
devs = alice, bob
ops = carol,, dave

[/]
* = r

[myrepo:/trunk]
@devs = rw
* =
"""


def test_sections_keep_document_order():
    doc = parse_policy(SAMPLE)
    assert doc.section_names == ("/", "myrepo:/trunk")


def test_groups_are_trimmed_member_sets():
    doc = parse_policy(SAMPLE)
    assert doc.group_members("devs") == {"alice", "bob"}
    assert doc.group_members("ops") == {"carol", "dave"}
    assert doc.group_members("missing") == frozenset()


def test_groups_section_is_not_a_path_section():
    assert parse_policy(SAMPLE).section("groups") is None


def test_entry_principals_and_masks():
    devs, anyone = parse_policy(SAMPLE).section("myrepo:/trunk").entries

    assert devs.principal == Principal.group("devs")
    assert devs.grants == Access.READ | Access.WRITE
    assert devs.denies == Access.NONE

    assert anyone.principal.kind == PrincipalKind.ANYONE
    assert anyone.grants == Access.NONE
    assert anyone.denies == Access.READ | Access.WRITE


def test_missing_letter_is_explicit_denial():
    entry = RuleEntry.from_permissions("alice", "w")
    assert entry.principal == Principal.user("alice")
    assert entry.grants == Access.WRITE
    assert entry.denies == Access.READ


def test_entry_must_grant_or_deny_every_bit():
    with pytest.raises(ValueError):
        RuleEntry(principal=Principal.anyone(), grants=Access.READ, denies=Access.NONE)


def test_qualified_section_name_splits_into_repository_and_path():
    doc = parse_policy(SAMPLE)
    trunk = doc.section("myrepo:/trunk")
    assert trunk.repository == "myrepo"
    assert trunk.path == "/trunk"

    root = doc.section("/")
    assert root.repository is None
    assert root.path == "/"


def test_malformed_lines_are_skipped(caplog):
    text = dedent(
        """\
        stray = rw
        [/ok]
        alice = r
        this line has no separator
        @ = rw
        [broken
        bob = rw
        [/ok2]
        carol = rw
        """
    )
    with caplog.at_level(logging.WARNING, logger="path_authz.spec.loader"):
        doc = parse_policy(text)

    assert doc.section_names == ("/ok", "/ok2")
    assert [str(e.principal) for e in doc.section("/ok").entries] == ["alice"]
    assert [str(e.principal) for e in doc.section("/ok2").entries] == ["carol"]
    assert len(caplog.records) == 5


def test_comments_continuations_and_repeated_headers():
    text = dedent(
        """\
        # comment
        ; another comment
        [groups]
        devs = alice,
          bob
        [/p]
        alice = r
        [/p]
        alice = rw
        bob: r
        """
    )
    doc = parse_policy(text)

    assert doc.group_members("devs") == {"alice", "bob"}
    assert doc.section_names == ("/p",)
    assert [(str(e.principal), e.permissions) for e in doc.section("/p").entries] == [
        ("alice", "rw"),
        ("bob", "r"),
    ]


def test_load_policy_from_file(tmp_path):
    path = tmp_path / "authz"
    path.write_text(SAMPLE)
    assert load_policy(path) == parse_policy(SAMPLE)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(PolicyLoadError, match="Could not load policy"):
        load_policy(tmp_path / "missing")


def test_load_invalid_yaml_raises(tmp_path):
    path = tmp_path / "authz.yaml"
    path.write_text("sections: [unclosed\n")
    with pytest.raises(PolicyLoadError):
        load_policy(path)


def test_yaml_snapshot_reloads_to_equal_document(tmp_path):
    doc = parse_policy(SAMPLE)
    target = tmp_path / "snapshot.yaml"
    doc.save(target)
    assert load_policy(target) == doc


def test_document_is_frozen():
    doc = parse_policy(SAMPLE)
    with pytest.raises(ValidationError):
        doc.sections = ()


def test_duplicate_section_names_rejected():
    with pytest.raises(ValueError, match="Duplicate section"):
        PolicyDocument(sections=(Section(name="/a"), Section(name="/a")))


def test_prefix_lookup_is_plain_string_match():
    doc = parse_policy("[/foo]\n* = r\n[/foobar]\n* = r\n[/bar]\n* = r\n")
    assert [s.name for s in doc.sections_with_prefix("/foo")] == ["/foo", "/foobar"]


def test_yaml_snapshot_skips_malformed_entries(tmp_path, caplog):
    path = tmp_path / "authz.yaml"
    path.write_text(
        dedent(
            """\
            sections:
              /p:
                '@': rw
                alice: r
            """
        )
    )
    with caplog.at_level(logging.WARNING, logger="path_authz.spec.document"):
        doc = load_policy(path)

    assert [str(e.principal) for e in doc.section("/p").entries] == ["alice"]
    assert len(caplog.records) == 1
