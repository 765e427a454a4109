"""Example pipeline: load a grid curve and recognize its leading straight part."""

from pathlib import Path

from preimage2d import GridCurve, Preimage, generate_tikz_document

DATA_PATH = Path(__file__).parent / "data" / "dss.dat"


def main() -> None:
    curve = GridCurve.from_file(DATA_PATH)
    pairs = list(curve.incident_points())

    preimage = Preimage(*pairs[0])
    count = 1
    while count < len(pairs) and preimage.add_front(*pairs[count]):
        count += 1

    print(f"Curve: {curve!r}")
    print(f"Straight pairs: {count} of {len(pairs)}")
    print(f"Inner leaning points: {preimage.inner_hull}")
    print(f"Outer leaning points: {preimage.outer_hull}")
    print(f"Separating line: {preimage.separating_line()}")

    output = Path("preimage_example.tex")
    output.write_text(generate_tikz_document(pairs[:count], preimage), encoding="utf-8")
    print(f"TikZ document written to {output}")


if __name__ == "__main__":
    main()
