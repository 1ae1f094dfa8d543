"""Allow running as ``python -m movie_recommender``."""

from .cli import main

if __name__ == "__main__":
    main()
