from __future__ import annotations


class NeuronError(ValueError):
    """Base class for every failure raised by neuron_zk."""


class MalformedID(NeuronError):
    def __init__(self, text: str, reason: str):
        super().__init__(f"Malformed zettel ID {text!r}: {reason}")
        self.text = text
        self.reason = reason


class InvalidTitleID(NeuronError):
    def __init__(self, title: str, slug: str):
        super().__init__(f"Title {title!r} does not give a usable ID (got {slug!r})")
        self.title = title
        self.slug = slug


class InvalidTagPattern(NeuronError):
    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid tag pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class NotAURI(NeuronError):
    def __init__(self, text: str):
        super().__init__(f"Not a URI: {text!r}")
        self.text = text


class UnrecognizedQueryLink(NeuronError):
    def __init__(self, text: str, reason: str):
        super().__init__(f"Unrecognized query link {text!r}: {reason}")
        self.text = text
        self.reason = reason


class NoteNotFound(NeuronError, LookupError):
    def __init__(self, zettel_id):
        super().__init__(f"No zettel with ID {zettel_id}")
        self.zettel_id = zettel_id


class NoteExists(NeuronError):
    def __init__(self, path):
        super().__init__(f"Zettel already exists: {path}")
        self.path = path
