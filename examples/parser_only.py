"""Parser Example - Cascade Expressions to AST and Back.

Demonstrates everything you can do with the Cascade parser:

1. Parse an expression to an AST
2. Inspect literals and lists
3. Expand slice lists
4. Report syntax errors with source context
5. Serialize AST back to canonical text
6. Walk the tree with pattern matching

Use cases:
- Evaluators and interpreters consuming the AST
- Linters and formatters for stored expressions
- Code generators building expressions programmatically

Python 3.13+.
"""

from __future__ import annotations


def example_1_basic_parsing() -> None:
    """Parse a function application and inspect it."""
    from cascade import parse
    from cascade.syntax.ast import Apply, Id

    print("=" * 60)
    print("Example 1: Basic Parsing")
    print("=" * 60)

    node = parse("(fun 1 2 3)")
    assert isinstance(node, Apply)
    assert isinstance(node.head, Id)

    print(f"Head: {node.head.name} at {node.head.span}")
    print(f"Arguments: {[arg.value for arg in node.args]}")
    print(f"Whole expression: {node.span}")
    print()


def example_2_literals() -> None:
    """Numbers, strings, and the two bracketed list kinds."""
    from cascade import parse

    print("=" * 60)
    print("Example 2: Literals and Lists")
    print("=" * 60)

    for source in ["-1.78E+3", "NaN", "'a\\nb'", "[7, 4.2 nan]", "['one' \"two\"]"]:
        node = parse(source)
        print(f"{source!r:20} -> {type(node).__name__}: {node}")
    print()


def example_3_slice_lists() -> None:
    """Slice lists store base:count:stride triples compactly."""
    from cascade import parse
    from cascade.syntax.ast import SliceList

    print("=" * 60)
    print("Example 3: Slice Lists")
    print("=" * 60)

    node = parse("<1:2:-1 3:3 5 7>")
    assert isinstance(node, SliceList)

    print(f"Triples: {list(node.triples())}")
    print(f"Expanded: {node.expand()}")
    print()


def example_4_errors() -> None:
    """Syntax errors carry an offset, a length and a diagnostic."""
    from cascade import CascadeSyntaxError, parse
    from cascade.diagnostics import DiagnosticFormatter, OutputFormat

    print("=" * 60)
    print("Example 4: Syntax Errors")
    print("=" * 60)

    formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)
    for source in ["(f 1) extra", "(fun 1 'abc", "`a *rest b`", "<1:0>"]:
        try:
            parse(source)
        except CascadeSyntaxError as e:
            print(e.format_with_context())
            if e.diagnostic is not None:
                print(formatter.format(e.diagnostic))
            print()


def example_5_serialization() -> None:
    """Serialize the AST back to canonical text."""
    from cascade import parse, serialize

    print("=" * 60)
    print("Example 5: Serialization")
    print("=" * 60)

    source = "( def  `fact n`\n  ?(if (le n 1) ?1 ?(mul n (fact (sub n 1)))) )"
    canonical = serialize(parse(source))
    print(f"Canonical: {canonical}")
    print(f"Stable: {serialize(parse(canonical)) == canonical}")
    print()


def example_6_tree_walk() -> None:
    """Collect every identifier with structural pattern matching."""
    from cascade import parse
    from cascade.syntax.ast import Apply, AstNode, Id, IdList, Uneval

    print("=" * 60)
    print("Example 6: Tree Walk")
    print("=" * 60)

    def identifiers(node: AstNode) -> list[str]:
        match node:
            case Id(name=name):
                return [name]
            case Apply(head=head, args=args):
                return [name for child in (head, *args) for name in identifiers(child)]
            case Uneval(expr=expr):
                return identifiers(expr)
            case IdList(names=names, vararg=vararg):
                return [*names, *([vararg] if vararg else [])]
            case _:
                return []

    node = parse("(def `f x *rest` ?(g x rest))")
    print(f"Identifiers: {identifiers(node)}")
    print()


def main() -> None:
    """Run all parser examples."""
    print()
    print("Cascade Parser Examples")
    print()

    example_1_basic_parsing()
    example_2_literals()
    example_3_slice_lists()
    example_4_errors()
    example_5_serialization()
    example_6_tree_walk()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
