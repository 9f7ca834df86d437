# main.py
"""
Main entry point for the floating shapes demo.

This script orchestrates the entire animation lifecycle:
1. Loads configuration from `config.json` and applies a preset.
2. Initializes the logging system.
3. Sets up the engine and the host window.
4. Runs the main loop, pumping the engine and repainting every frame.
5. Handles clean shutdown.
"""
import argparse
import logging
import cProfile
import pstats
import io

from utils import setup_logging, load_config, merge_preset


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Floating shapes background animation.")
    parser.add_argument('--config', default='config.json', help="Path to the JSON config file.")
    parser.add_argument(
        '--preset',
        default=None,
        help="Name of a preset from the config file (e.g. bubbles, hearts, rain)."
    )
    return parser.parse_args(argv)


def main(argv=None):
    """
    The main function to run the animation.
    """
    args = parse_args(argv)

    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"FATAL: Could not load {args.config}. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Floating Shapes Starting ---")

    run_params = config.get('run_control', {})
    config = merge_preset(config, args.preset or run_params.get('preset'))

    from constants import FPS
    from engine import Engine
    from settings import AnimationSettings
    from visualization import Visualizer

    settings = AnimationSettings.from_dict(config.get('animation', {}))

    # --- Component Initialization ---
    visualizer = Visualizer(settings, backdrop=config.get('backdrop'))
    engine = Engine(settings)

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    log_throttle = run_params.get('log_throttle_frames', 300)
    max_frames = run_params.get('max_frames', 0)  # 0 runs until the window is closed

    running = True
    frame = 0

    engine.start()
    if profiler:
        profiler.enable()
    try:
        while running:
            engine.pump()

            # The visualizer returns False once the user closes the window.
            if not visualizer.draw(engine.snapshot):
                running = False

            frame += 1
            visualizer.clock.tick(FPS)

            # Rule 2.4: Hot loops must throttle logs
            if frame % log_throttle == 0:
                logging.info(
                    f"Frame {frame} | {len(engine.snapshot)} shapes | "
                    f"{visualizer.clock.get_fps():.1f} FPS"
                )

            if max_frames and frame >= max_frames:
                logging.info(f"Reached max_frames ({max_frames}). Stopping animation.")
                running = False
    finally:
        engine.stop()
        if profiler:
            profiler.disable()
        visualizer.close()

    logging.info("Animation loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Floating Shapes Shutting Down ---")


if __name__ == "__main__":
    main()
