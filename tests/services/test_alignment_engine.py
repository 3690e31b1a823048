import pytest

from conftest import make_item
from item_aligner.domain.item import Item
from item_aligner.domain.take import TAKE_KIND_MIDI, Take
from item_aligner.domain.track import Track
from item_aligner.errors import MissingAudioSourceError, TrackAllocationError, UnsupportedTakeError
from item_aligner.services.alignment_engine import AlignmentEngine, unmuted_for_analysis
from item_aligner.services.sample_scanner import SampleScanner


@pytest.fixture
def engine(project):
    return AlignmentEngine(project, scanner=SampleScanner(block_size=64))


@pytest.mark.parametrize("start, target", [(0.0, 5.0), (10.0, 5.0), (3.0, 0.1), (-2.0, -1.0)])
def test_peak_lands_on_target(project, engine, start, target):
    track = project.create_track_at(0)
    item = make_item(position=start, peak_at=0.25)
    track.add_item(item)

    new_position = engine.align_to_instant(item, target)

    assert new_position == item.position
    assert item.position + 0.25 == pytest.approx(target)
    assert item.length == 1.0
    assert item.track is track


def test_position_may_go_negative(project, engine):
    track = project.create_track_at(0)
    item = make_item(position=4.0, peak_at=0.5)
    track.add_item(item)

    engine.align_to_instant(item, 0.2)

    assert item.position == pytest.approx(-0.3)


def test_repeated_alignment_is_stable(project, engine):
    track = project.create_track_at(0)
    item = make_item(position=1.0, peak_at=0.4)
    track.add_item(item)

    engine.align_to_instant(item, 2.0)
    first = item.position
    engine.align_to_instant(item, 2.0)

    assert item.position == first


def test_moves_item_to_destination_track(project, engine):
    origin = project.create_track_at(0)
    destination = project.create_track_at(1)
    item = make_item(position=0.0)
    origin.add_item(item)

    engine.align_to_instant(item, 1.0, destination)

    assert item.track is destination
    assert origin.items == []
    assert destination.items == [item]


def test_mute_flags_restored_after_alignment(project, engine):
    origin = project.create_track_at(0)
    origin.muted = True
    destination = project.create_track_at(1)
    item = make_item(muted=True)
    origin.add_item(item)

    engine.align_to_instant(item, 1.0, destination)

    assert item.muted is True
    assert origin.muted is True
    assert destination.muted is False


@pytest.mark.parametrize(
    "take, error",
    [
        (None, UnsupportedTakeError),
        (Take(name="notes", kind=TAKE_KIND_MIDI), UnsupportedTakeError),
        (Take(name="offline"), MissingAudioSourceError),
    ],
)
def test_non_audio_items_are_rejected_without_side_effects(project, engine, take, error):
    track = project.create_track_at(0)
    track.muted = True
    item = Item(name="bad", position=3.0, length=1.0, take=take, muted=True)
    track.add_item(item)

    with pytest.raises(error):
        engine.align_to_instant(item, 1.0)

    assert item.position == 3.0
    assert item.muted is True
    assert track.muted is True


def test_unmuted_for_analysis_clears_and_restores(project):
    track = project.create_track_at(0)
    track.muted = True
    item = make_item(muted=False)
    track.add_item(item)

    with pytest.raises(RuntimeError):
        with unmuted_for_analysis(item):
            assert track.muted is False
            assert item.muted is False
            raise RuntimeError("scan failed")

    assert track.muted is True
    assert item.muted is False


def test_alignment_crossfades_with_new_neighbour(project, engine):
    track = project.create_track_at(0)
    neighbour = make_item(name="neighbour", position=0.0, peak_at=None, duration_seconds=2.0)
    item = make_item(name="moved", position=5.0, peak_at=0.0)
    track.add_item(neighbour)
    track.add_item(item)

    engine.align_to_instant(item, 1.5)

    assert neighbour.fade_out_length == pytest.approx(0.5)
    assert item.fade_in_length == pytest.approx(0.5)


def test_destination_outside_project_leaves_item_untouched(project, engine):
    track = project.create_track_at(0)
    track.muted = True
    item = make_item(position=3.0, muted=True)
    track.add_item(item)

    with pytest.raises(TrackAllocationError):
        engine.align_to_instant(item, 1.0, Track(name="outside"))

    assert item.position == 3.0
    assert item.track is track
    assert item.muted is True
    assert track.muted is True


def test_detached_destination_is_rejected(project, engine):
    track = project.create_track_at(0)
    removed = project.create_track_at(1)
    project.remove_track(removed)
    item = make_item(position=3.0)
    track.add_item(item)

    with pytest.raises(TrackAllocationError):
        engine.align_to_instant(item, 1.0, removed)

    assert item.position == 3.0
    assert removed.items == []
