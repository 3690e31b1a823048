import pytest

from conftest import make_item
from item_aligner.domain.project import Project
from item_aligner.domain.track import Track


def test_add_track_appends_after_highest_index():
    project = Project("p")
    project.create_track_at(4)

    track = project.add_track(Track(name="Appended"))

    assert track.index == 5
    assert [t.index for t in project.get_tracks()] == [4, 5]


def test_create_track_at_sparse_index_does_not_shift_existing():
    project = Project("p")
    first = project.add_track(Track(name="A"))

    created = project.create_track_at(3)

    assert first.index == 0
    assert created.index == 3
    assert created.name == "Track 4"
    assert project.track_at(1) is None
    assert project.track_count() == 2


def test_insert_track_at_occupied_or_negative_index_raises():
    project = Project("p")
    project.create_track_at(0)

    with pytest.raises(ValueError):
        project.create_track_at(0)
    with pytest.raises(ValueError):
        project.create_track_at(-1)


def test_remove_track_clears_index():
    project = Project("p")
    track = project.create_track_at(2)

    project.remove_track(track)

    assert track.index is None
    assert project.get_tracks() == []
    with pytest.raises(ValueError):
        project.remove_track(track)


def test_move_item_to_track_reparents_item():
    project = Project("p")
    source_track = project.create_track_at(0)
    dest_track = project.create_track_at(1)
    item = make_item()
    source_track.add_item(item)

    project.move_item_to_track(item, dest_track)

    assert item.track is dest_track
    assert item not in source_track.items
    assert dest_track.items == [item]
    assert project.get_items() == [item]


def test_move_item_to_foreign_track_raises():
    project = Project("p")
    track = project.create_track_at(0)
    item = make_item()
    track.add_item(item)

    with pytest.raises(ValueError):
        project.move_item_to_track(item, Track(name="Elsewhere"))
