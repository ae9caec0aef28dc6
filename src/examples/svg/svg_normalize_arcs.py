"""Creates a SVG file showing a path with elliptical arcs twice:
the original path data (black) and its arc-free version made of cubic curves (red),
plus the reversed arc-free path shifted to the right (blue).
"""

from pathlib import Path

import svgwrite

from svgpathdata.arc import normalize_arcs
from svgpathdata.inverter import invert
from svgpathdata.parser import parse
from svgpathdata.serializer import serialize_to_string
from svgpathdata.transform import affine_mapper, transform_points

OUTPUT_FILE = "data/output/example/svg/normalize_arcs.svg"

PATH_STRING_INPUT = (
    "M10,60 a40,25 -30 0 1 80,0 a40,40 0 1 0 60,20 L150,110 Z"
    + "M20,150 A30,30 0 0 0 80,150 A30,30 0 1 1 140,150"
)

STROKE_WIDTH = 0.8


def main(output_file: str = OUTPUT_FILE) -> str:
    """Parses PATH_STRING_INPUT, normalizes its arcs and draws
    original, normalized and reversed path into one SVG file.

    Returns:
        str: the path data of the arc-free version
    """
    normalized = [normalize_arcs(sub_path).materialized() for sub_path in parse(PATH_STRING_INPUT)]
    normalized_string = serialize_to_string(normalized)

    shift_right = affine_mapper([1, 0, 0, 1, 180, 0])
    reversed_string = serialize_to_string(transform_points(invert(sub_path), shift_right) for sub_path in normalized)

    dwg = svgwrite.Drawing(output_file, size=("400mm", "200mm"), viewBox="0 0 400 200", profile="full", debug=False)
    dwg.add(dwg.path(d=PATH_STRING_INPUT, stroke="black", stroke_width=3 * STROKE_WIDTH, fill="none"))
    dwg.add(dwg.path(d=normalized_string, stroke="red", stroke_width=STROKE_WIDTH, fill="none"))
    dwg.add(dwg.path(d=reversed_string, stroke="blue", stroke_width=STROKE_WIDTH, fill="none"))

    # Save the SVG file
    Path(output_file).parent.mkdir(parents=True, exist_ok=True)
    dwg.saveas(output_file, pretty=True, indent=2)
    return normalized_string


if __name__ == "__main__":
    print(main())
