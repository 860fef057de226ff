"""
Main entry point for running the engine over USI.

Usage:
    python -m shogi_engine.usi
    shogi-engine
"""

from shogi_engine.usi.interface import USIEngine


def main():
    engine = USIEngine()
    engine.run()


if __name__ == "__main__":
    main()
