import datetime
import logging

import hypothesis

from treejoin import Element

logging.basicConfig(level=logging.DEBUG)

# Debug logging slows down the examples, so increase the hypothesis deadline
hypothesis.settings.register_profile("ci", deadline=datetime.timedelta(seconds=5))
hypothesis.settings.load_profile("ci")


def build_root(*tags: str) -> Element:
    """
    Build a root element, with a child per tag.
    """
    root = Element("root")
    for tag in tags:
        root.append(tag)

    return root


def detach(node: Element):
    node.remove()
