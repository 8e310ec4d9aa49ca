from dataclasses import dataclass
from typing import Optional

from lxml import etree

from ..constants import ATOM_NS
from .document import new_element, qname


@dataclass
class Person:
    """
    A person record: an entry author or an event attendee.
    Args:
        name: Display name of the person (optional).
        email: Email address of the person (optional).
    """
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_atom_element(cls, element: etree._Element) -> "Person":
        """Reads an atom:author / atom:contributor element."""
        name = element.findtext(qname(ATOM_NS, "name"))
        email = element.findtext(qname(ATOM_NS, "email"))
        return cls(name=name, email=email)

    def to_atom_element(self, tag: str = "author") -> etree._Element:
        node = new_element(ATOM_NS, tag)
        if self.name is not None:
            etree.SubElement(node, qname(ATOM_NS, "name")).text = self.name
        if self.email is not None:
            etree.SubElement(node, qname(ATOM_NS, "email")).text = self.email
        return node

    def __str__(self):
        if self.name and self.email:
            return f"{self.name} <{self.email}>"
        return self.name or self.email or ""
