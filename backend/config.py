import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Optional: fixed seed for mole placement
    RANDOM_SEED = int(os.environ['RANDOM_SEED']) if os.environ.get('RANDOM_SEED') else None
    # Round shape
    ROUND_DURATION_SEC = int(os.environ.get('ROUND_DURATION_SEC', '30'))
    BOARD_SIZE = int(os.environ.get('BOARD_SIZE', '12'))
    MAX_MOLES = int(os.environ.get('MAX_MOLES', '3'))
    # Cadence of both the mole-spawn tick and the countdown tick (seconds)
    TICK_INTERVAL_SEC = float(os.environ.get('TICK_INTERVAL_SEC', '1.0'))
    # Optional: debounce start commands (ms). 0 disables.
    CONTROLLER_DEBOUNCE_MS = int(os.environ.get('CONTROLLER_DEBOUNCE_MS', '0'))
