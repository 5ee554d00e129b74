from .export import _cli

if __name__ == "__main__":
    raise SystemExit(_cli())
