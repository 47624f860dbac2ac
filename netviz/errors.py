class NetvizError(Exception):
    """Base class for everything the engine raises."""


class UnknownNodeError(NetvizError, KeyError):
    def __init__(self, label):
        super().__init__(label)
        self.label = label

    def __str__(self):
        return f"Unknown node: {self.label}"


class UnknownTopologyError(NetvizError, ValueError):
    pass


class NoEdgesError(NetvizError):
    pass
