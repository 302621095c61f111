"""Factory Boy factories for Spotify Web API payloads used in tests."""

import factory


class ImagePayloadFactory(factory.DictFactory):
    url = factory.Sequence(lambda n: f"http://images/cover-{n}.jpg")
    height = 640
    width = 640


class AlbumPayloadFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: f"album-{n}")
    name = factory.Sequence(lambda n: f"Album {n}")
    images = factory.LazyFunction(lambda: [ImagePayloadFactory()])


class TrackPayloadFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: f"track-{n}")
    name = factory.Sequence(lambda n: f"Track {n}")
    uri = factory.LazyAttribute(lambda obj: f"spotify:track:{obj.id}")
    artists = factory.LazyFunction(lambda: [{"name": "Artist A"}, {"name": "Artist B"}])
    album = factory.SubFactory(AlbumPayloadFactory)


class AudioFeaturePayloadFactory(factory.DictFactory):
    id = factory.Sequence(lambda n: f"track-{n}")
    tempo = 120.0
    energy = 0.5


def tracks_with_tempos(tempos):
    """Build matching (tracks, features) lists; a ``None`` tempo yields a missing feature row."""
    tracks = TrackPayloadFactory.create_batch(len(tempos))
    features = [
        None if tempo is None else AudioFeaturePayloadFactory(id=track["id"], tempo=tempo)
        for track, tempo in zip(tracks, tempos)
    ]
    return tracks, features
