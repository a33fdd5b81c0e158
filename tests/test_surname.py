from hypothesis import given, strategies as st

from conftest import make_name
from util.entries import Character, OtherEntry, Placeholder
from util.surname import COMPOUND_SURNAMES, is_compound_surname, resolve_segmentation


def test_empty_entries():
    ctx = resolve_segmentation([])
    assert ctx.surname_length == 0
    assert ctx.countable_entries == ()
    assert ctx.surname_entries == ()
    assert ctx.given_name_entries == ()
    assert ctx.effective_length == 0


def test_single_entry_is_surname():
    ctx = resolve_segmentation(make_name(("王", 4)))
    assert ctx.surname_length == 1
    assert [e.value for e in ctx.surname_entries] == ["王"]
    assert ctx.given_name_entries == ()
    assert ctx.effective_length == 1


def test_single_surname(chen_da_wen):
    ctx = resolve_segmentation(chen_da_wen)
    assert ctx.surname_length == 1
    assert [e.value for e in ctx.given_name_entries] == ["大", "文"]
    assert ctx.surname_indices == (0,)
    assert ctx.given_name_indices == (1, 2)


def test_compound_surname_detected(sima_guang):
    ctx = resolve_segmentation(sima_guang)
    assert ctx.surname_length == 2
    assert [e.value for e in ctx.surname_entries] == ["司", "馬"]
    assert [e.value for e in ctx.given_name_entries] == ["光"]


def test_compound_surname_with_longer_given_name():
    ctx = resolve_segmentation(make_name(("歐", 15), ("陽", 12), ("修", 10), ("文", 4)))
    assert ctx.surname_length == 2
    assert ctx.given_name_indices == (2, 3)


def test_compound_surname_alone():
    ctx = resolve_segmentation(make_name(("諸", 16), ("葛", 15)))
    assert ctx.surname_length == 2
    assert ctx.given_name_entries == ()


def test_simplified_compound_surname():
    assert resolve_segmentation(make_name(("欧", 8), ("阳", 6), ("修", 9))).surname_length == 2


def test_placeholder_blocks_compound_detection():
    entries = [Character("司", 5), Placeholder(strokes=10), Character("馬", 10)]
    assert resolve_segmentation(entries).surname_length == 1

    entries = [Placeholder(strokes=5), Character("司", 5), Character("馬", 10)]
    assert resolve_segmentation(entries).surname_length == 1


def test_non_countable_entries_are_skipped_but_indexed(other_entry):
    entries = [Character("陳", 16), other_entry, Character("大", 3), Character("文", 4)]
    ctx = resolve_segmentation(entries)
    assert ctx.countable_indices == (0, 2, 3)
    assert ctx.given_name_indices == (2, 3)
    assert ctx.effective_length == 3


def test_non_countable_between_compound_characters(other_entry):
    entries = [Character("司", 5), other_entry, Character("馬", 10), Character("光", 6)]
    ctx = resolve_segmentation(entries)
    assert ctx.surname_length == 2
    assert ctx.surname_indices == (0, 2)


def test_override_is_clamped(chen_da_wen):
    assert resolve_segmentation(chen_da_wen, surname_length=2).surname_length == 2
    assert resolve_segmentation(chen_da_wen, surname_length=0).surname_length == 0
    assert resolve_segmentation(chen_da_wen, surname_length=5).surname_length == 2
    assert resolve_segmentation(make_name(("王", 4)), surname_length=2).surname_length == 1


def test_override_beats_dictionary(sima_guang):
    assert resolve_segmentation(sima_guang, surname_length=1).surname_length == 1


def test_negative_override_is_ignored(sima_guang):
    assert resolve_segmentation(sima_guang, surname_length=-1).surname_length == 2


def test_explicit_effective_length(chen_da_wen):
    assert resolve_segmentation(chen_da_wen, effective_length=1).effective_length == 1


def test_dictionary_contents():
    assert is_compound_surname("司馬")
    assert is_compound_surname("上官")
    assert not is_compound_surname("陳大")
    assert all(len(value) == 2 for value in COMPOUND_SURNAMES)
    assert len(COMPOUND_SURNAMES) >= 60


_entries = st.lists(
    st.one_of(
        st.builds(Character, value=st.sampled_from(["司", "馬", "歐", "陽", "王", "文"]),
                  strokes=st.one_of(st.none(), st.integers(1, 30))),
        st.builds(Placeholder, strokes=st.one_of(st.none(), st.integers(1, 30))),
        st.builds(OtherEntry, type=st.just("separator")),
    ),
    max_size=8,
)


@given(_entries, st.one_of(st.none(), st.integers(-2, 6)))
def test_segments_always_cover_countable_entries(entries, override):
    ctx = resolve_segmentation(entries, surname_length=override)
    assert ctx.surname_length in (0, 1, 2)
    assert ctx.surname_length <= len(ctx.countable_entries)
    assert len(ctx.surname_entries) + len(ctx.given_name_entries) == len(ctx.countable_entries)
    assert ctx.surname_entries + ctx.given_name_entries == ctx.countable_entries
    assert ctx.surname_indices + ctx.given_name_indices == ctx.countable_indices


@given(_entries)
def test_compound_surname_requires_two_leading_characters(entries):
    ctx = resolve_segmentation(entries)
    if ctx.surname_length == 2:
        first, second = ctx.countable_entries[:2]
        assert first.type == "character" and second.type == "character"
        assert first.value + second.value in COMPOUND_SURNAMES
