from collections.abc import Iterable

import chardet


def detect_encoding(file: Iterable[bytes]) -> str | None:
    """Determine the encoding of a binary file.

    Args:
        file: The file to detect the encoding of, as an iterable of byte lines.

    Returns:
        The encoding if detected successfully, otherwise None.
    """

    detector = chardet.UniversalDetector()

    for line in file:
        if not detector.done:
            detector.feed(line)
        else:
            break

    result = detector.close()

    if encoding := result["encoding"]:
        encoding = encoding.lower()

        if encoding == "ascii":
            # The detector may stop early, so widen to a superset.
            encoding = "utf-8"

        return encoding

    return None
