"""
Field attribute parsing for the errordef DSL.

DSL Syntax:

    #[from]
    #[deprecated("use other_field")]
    #[doc = "Path that could not be opened"]
"""

from typing import TYPE_CHECKING, Any, NamedTuple

from .. import ir
from ..lexer import Token, TokenType

FROM_MARKER = "from"


class AttributeSite(NamedTuple):
    """A parsed attribute and the `#` token it started at."""

    attribute: ir.Attribute
    token: Token


class AttributeParserMixin:
    """
    Mixin providing attribute list parsing and #[from] marker extraction.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        expect: Any
        advance: Any
        match: Any
        error: Any
        parse_balanced_run: Any

    def parse_outer_attributes(self) -> list[AttributeSite]:
        """
        Parse zero or more attributes in front of a field.

        Grammar:
            ATTR := "#" "[" IDENTIFIER ( "(" TOKENS ")" | "=" TOKENS )? "]"
        """
        sites: list[AttributeSite] = []
        while self.match(TokenType.HASH):
            hash_token = self.advance()
            self.expect(TokenType.LBRACKET, "Expected [ after #")
            name = self.expect(TokenType.IDENTIFIER, "Expected attribute name").value

            arguments = None
            if self.match(TokenType.LPAREN):
                self.advance()
                inner = self.parse_balanced_run()
                self.expect(TokenType.RPAREN, "Expected )")
                arguments = f"({inner})"
            elif self.match(TokenType.EQUALS):
                self.advance()
                arguments = f" = {self.parse_balanced_run()}"

            self.expect(TokenType.RBRACKET, "Expected ]")
            sites.append(AttributeSite(ir.Attribute(name=name, arguments=arguments), hash_token))
        return sites

    def take_from_marker(
        self, sites: list[AttributeSite]
    ) -> tuple[list[ir.Attribute], Token | None]:
        """
        Split the #[from] marker out of a field's attributes.

        Returns:
            The remaining attributes in order, and the marker's token if
            the field carried one

        Raises:
            ParseError: If the field is marked #[from] more than once
        """
        marker: Token | None = None
        remaining: list[ir.Attribute] = []
        for site in sites:
            if site.attribute.name == FROM_MARKER and site.attribute.is_word:
                if marker is not None:
                    raise self.error("Field marked #[from] twice", site.token)
                marker = site.token
            else:
                remaining.append(site.attribute)
        return remaining, marker
