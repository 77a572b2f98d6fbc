class TrackTrendsError(Exception):
    pass


class DataLoadFailure(TrackTrendsError):
    """The dataset could not be read. Fatal for the session."""


class SessionNotReady(TrackTrendsError):
    """A transition was requested before the dataset finished loading."""


class InvalidSceneIndex(TrackTrendsError, ValueError):
    def __init__(self, index, scene_count):
        super().__init__(f"Scene index {index!r} is outside 0..{scene_count - 1}")
        self.index = index
        self.scene_count = scene_count


class InvalidFilterValue(TrackTrendsError, ValueError):
    def __init__(self, field, value):
        super().__init__(f"Invalid value for artist filter '{field}': {value!r}")
        self.field = field
        self.value = value
