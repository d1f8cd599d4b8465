#!/usr/bin/env python3
"""
sevenseg - Command Line Interface

Entry point for the ``sevenseg`` console script.
"""

import argparse
import json
import logging
import sys

from sevenseg.__version__ import __version__

log = logging.getLogger(__name__)


def _setup_logging(verbose=0):
    """Configure root logging from the -v count (filter out noisy PIL)."""
    if verbose >= 2:
        logging.basicConfig(level=logging.DEBUG, format='[%(levelname)s] %(name)s: %(message)s')
        logging.getLogger('PIL').setLevel(logging.WARNING)
    elif verbose == 1:
        logging.basicConfig(level=logging.INFO, format='[%(levelname)s] %(message)s')
    else:
        logging.basicConfig(level=logging.WARNING)


def parse_mask(text):
    """Parse a segment mask given as decimal, 0x.. hex or 0b.. binary."""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid mask: {text!r}") from None


def _add_state_args(parser):
    """--digit / --mask selection shared by the output commands."""
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--digit", "-n", type=int, help="Digit to show (wrapped into 0-9)")
    group.add_argument("--mask", "-m", type=parse_mask,
                       help="Raw abcdefgDP mask, e.g. 0b11111101 or 0xfd")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="sevenseg",
        description="Procedural seven-segment digit graphics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    sevenseg svg --digit 7 -o seven.svg     Write digit 7 as SVG
    sevenseg png --mask 0xff -o all.png     Rasterize all segments lit
    sevenseg demo -o demo.gif               Animated demo cycle
    sevenseg info                           Show geometry for saved params
    sevenseg config --set shape.gap=0.5     Change a saved parameter
    sevenseg gui --demo                     Live preview window
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # SVG command
    svg_parser = subparsers.add_parser("svg", help="Write the digit as SVG")
    _add_state_args(svg_parser)
    svg_parser.add_argument("--output", "-o", help="Output file (stdout if omitted)")
    svg_parser.add_argument("--no-style", action="store_true",
                            help="Omit the embedded on/off stylesheet")
    svg_parser.add_argument("--no-dp", action="store_true", help="Leave out the decimal point")

    # PNG command
    png_parser = subparsers.add_parser("png", help="Rasterize the digit to PNG")
    _add_state_args(png_parser)
    png_parser.add_argument("--output", "-o", default="digit.png", help="Output file")
    png_parser.add_argument("--scale", "-s", type=float, default=20.0,
                            help="Pixels per geometry unit (default 20)")
    png_parser.add_argument("--no-dp", action="store_true", help="Leave out the decimal point")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Render one demo cycle as animated GIF")
    demo_parser.add_argument("--output", "-o", default="sevenseg-demo.gif", help="Output file")
    demo_parser.add_argument("--scale", "-s", type=float, default=10.0,
                             help="Pixels per geometry unit (default 10)")
    demo_parser.add_argument("--seed", type=int, help="Random seed for reproducible output")

    # Info command
    subparsers.add_parser("info", help="Show parameters, bounds and skew")

    # Config command
    config_parser = subparsers.add_parser("config", help="Show or change saved settings")
    config_group = config_parser.add_mutually_exclusive_group()
    config_group.add_argument("--show", action="store_true", help="Print effective settings")
    config_group.add_argument("--set", metavar="KEY=VALUE", action="append",
                              help="Set a dotted key, e.g. shape.gap=0.5 or style.on_color=#00ff00")
    config_group.add_argument("--reset", action="store_true", help="Delete saved settings")

    # GUI command
    gui_parser = subparsers.add_parser("gui", help="Open the preview window")
    gui_parser.add_argument("--digit", "-n", type=int, help="Digit to show")
    gui_parser.add_argument("--demo", action="store_true", help="Loop the demo animation")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "svg":
        return write_svg_file(digit=args.digit, mask=args.mask, output=args.output,
                              styled=not args.no_style, include_dp=not args.no_dp)
    elif args.command == "png":
        return write_png_file(digit=args.digit, mask=args.mask, output=args.output,
                              scale=args.scale, include_dp=not args.no_dp)
    elif args.command == "demo":
        return write_demo_gif(output=args.output, scale=args.scale, seed=args.seed)
    elif args.command == "info":
        return show_info()
    elif args.command == "config":
        return edit_config(set_values=args.set, reset=args.reset)
    elif args.command == "gui":
        return gui(digit=args.digit, demo=args.demo)

    return 0


def _build_digit(digit=None, mask=None, include_dp=True):
    """Generate the saved geometry and light it per --digit/--mask.

    With neither given, every segment is lit.
    """
    from sevenseg.conf import get_shape_params, get_style
    from sevenseg.controller import SevenSegController
    from sevenseg.geometry import generate

    style = get_style()
    generated = generate(get_shape_params(), include_dp=include_dp)
    controller = SevenSegController(generated.parts, style.on_class, style.off_class)
    if digit is not None:
        controller.set_digit(digit)
    elif mask is not None:
        controller.set_segments(mask)
    else:
        controller.on()
    return generated, controller, style


def write_svg_file(digit=None, mask=None, output=None, styled=True, include_dp=True):
    """Write the digit as SVG to a file or stdout."""
    try:
        from sevenseg.svg_writer import default_stylesheet, to_svg_string, write_svg

        generated, _, style = _build_digit(digit, mask, include_dp)
        stylesheet = None
        if styled:
            stylesheet = default_stylesheet(style.on_class, style.off_class,
                                            style.on_color, style.off_color)
        if output:
            path = write_svg(generated, output, stylesheet)
            print(f"Wrote {path}")
        else:
            print(to_svg_string(generated, stylesheet))
        return 0
    except Exception as e:
        log.debug("svg failed", exc_info=True)
        print(f"Error: {e}")
        return 1


def write_png_file(digit=None, mask=None, output="digit.png", scale=20.0, include_dp=True):
    """Rasterize the digit to PNG."""
    try:
        from sevenseg.raster import render_image, save_png

        generated, controller, style = _build_digit(digit, mask, include_dp)
        img = render_image(generated, scale=scale,
                           on_color=style.on_color, off_color=style.off_color,
                           background=style.background, on_class=controller.on_class)
        path = save_png(img, output)
        print(f"Wrote {path} ({img.width}x{img.height})")
        return 0
    except Exception as e:
        log.debug("png failed", exc_info=True)
        print(f"Error: {e}")
        return 1


def write_demo_gif(output="sevenseg-demo.gif", scale=10.0, seed=None):
    """Render one demo cycle as an animated GIF."""
    try:
        import random

        from sevenseg.animation import demo_sequence, play
        from sevenseg.raster import render_image, save_gif

        generated, controller, style = _build_digit()
        controller.off()

        images = []
        durations = []

        def capture(frame):
            images.append(render_image(
                generated, scale=scale,
                on_color=style.on_color, off_color=style.off_color,
                background=style.background, on_class=controller.on_class))
            durations.append(frame.delay)

        frames = demo_sequence(random.Random(seed))
        play(controller, frames, on_frame=capture)
        path = save_gif(images, output, durations)
        print(f"Wrote {path} ({len(images)} frames)")
        return 0
    except Exception as e:
        log.debug("demo failed", exc_info=True)
        print(f"Error: {e}")
        return 1


def show_info():
    """Print effective parameters, bounds and skew transform."""
    try:
        from sevenseg.conf import CONFIG_PATH, get_shape_params
        from sevenseg.geometry import generate

        params = get_shape_params()
        generated = generate(params)
        h = params.horizontal_segment
        v = params.vertical_segment
        dp = params.dp

        print(f"Config:              {CONFIG_PATH}")
        print(f"Horizontal segment:  {h.width} x {h.height}")
        print(f"Vertical segment:    {v.width} x {v.height}")
        print(f"Decimal point:       d={dp.diameter} nudge=({dp.nudge_x}, {dp.nudge_y})")
        print(f"Gap:                 {params.gap}")
        print(f"Skew distance:       {params.digit_skew_distance}")
        print(f"Digit height:        {params.digit_height}")
        print(f"Skew angle:          {generated.transform.angle:.4f}°")
        print(f"Transform:           {generated.transform.to_svg()}")
        print(f"Viewbox:             {generated.bounds.width} x {generated.bounds.height}")
        return 0
    except Exception as e:
        log.debug("info failed", exc_info=True)
        print(f"Error: {e}")
        return 1


def edit_config(set_values=None, reset=False):
    """Show, change or reset saved settings."""
    try:
        from sevenseg import conf

        if reset:
            conf.reset_config()
            print("Settings reset to defaults.")
            return 0

        for item in set_values or []:
            key, sep, value = item.partition("=")
            if not sep or not key:
                print(f"Error: expected KEY=VALUE, got {item!r}")
                return 1
            conf.set_config_value(key.strip(), value.strip())
            print(f"Set {key.strip()} = {value.strip()}")

        effective = {
            "shape": conf.get_shape_params().to_dict(),
            "style": conf.get_style().to_dict(),
        }
        print(json.dumps(effective, indent=2))
        return 0
    except Exception as e:
        log.debug("config failed", exc_info=True)
        print(f"Error: {e}")
        return 1


def gui(digit=None, demo=False):
    """Launch the preview window."""
    try:
        from PyQt6.QtWidgets import QApplication

        from sevenseg.animation import demo_sequence
        from sevenseg.conf import get_shape_params
        from sevenseg.qt_components.uc_seven_segment import UCSevenSegment
    except ImportError as e:
        print(f"Error: PyQt6 not available: {e}")
        print("Install with: pip install sevenseg[gui]")
        return 1

    try:
        app = QApplication.instance() or QApplication(sys.argv)
        widget = UCSevenSegment(get_shape_params())
        widget.setWindowTitle("sevenseg")
        widget.resize(240, 360)

        if demo:
            frames = demo_sequence() * 50
            widget.play(frames)
        elif digit is not None:
            widget.set_digit(digit)
        else:
            widget.on()

        widget.show()
        return app.exec()
    except Exception as e:
        log.debug("gui failed", exc_info=True)
        print(f"Error launching GUI: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
