# main.py
"""
Main entry point for the matrix rain.

This script orchestrates the animation lifecycle:
1. Loads configuration from `config.json`, if present.
2. Initializes the logging system.
3. Opens the window and creates the engine.
4. Drives the engine's tick and paint callbacks until the user quits.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import cProfile
import pstats
import io
import pygame

def main():
    """
    The main function to run the animation.
    """
    # Logging is not set up yet, so we use a print for a fatal config error.
    config_missing = False
    try:
        config = load_config('config.json')
    except FileNotFoundError:
        config = {}
        config_missing = True
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Matrix Rain Starting ---")
    if config_missing:
        logging.warning("No config.json found. Running with built-in defaults.")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from engine import MatrixRain
    from visualization import Visualizer

    # --- Component Initialization ---
    # 1. The engine's clock must share a time base with the ticks we feed it.
    engine = MatrixRain(sim_params, clock=pygame.time.get_ticks)

    # 2. The visualizer opens the window at the engine's preferred size and
    #    receives the engine's repaint requests.
    visualizer = Visualizer(engine, vis_params)
    engine.request_repaint = visualizer.request_repaint

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    log_throttle = run_params.get('log_throttle_steps', 1000)
    max_steps = run_params.get('max_steps', 0)  # 0 runs until the user quits
    frame_clock = pygame.time.Clock()
    ticks_per_second = max(1, 1000 // visualizer.tick_ms)

    running = True
    step_num = 0

    if profiler:
        profiler.enable()
    while running:
        engine.on_tick(pygame.time.get_ticks())
        step_num += 1

        if not visualizer.draw(engine):
            running = False

        # Hot loops must throttle logs
        if step_num % log_throttle == 0:
            logging.info(f"Tick {step_num}, {frame_clock.get_fps():.1f} ticks/s")
            logging.debug(f"Tick {step_num} | Cached glyph surfaces: {visualizer.sink.cached_glyphs}")

        if max_steps and step_num >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping animation.")
            running = False

        frame_clock.tick(ticks_per_second)
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

    logging.info("--- Matrix Rain Shutting Down ---")


if __name__ == "__main__":
    main()
