from collections import UserDict


class Session(UserDict[str, str]):
    """A named group of key/value pairs, i.e. the body under [name].

    Values are kept as text. Use get() for a lookup that returns None if the key is absent.
    """


class Document(UserDict[str, Session]):
    """A parsed configuration, mapping session names to sessions.

    Keys set before the first header belong to the unnamed session "",
    which is present in every document returned by the loaders.
    """

    def session(self, name: str) -> Session | None:
        """Look up a session by its exact name.

        Args:
            name: The session name. "" is the unnamed session.

        Returns:
            The session or None if it does not exist.
        """

        return self.data.get(name)
