"""Run the demo window with `python -m scalablelayout`."""
from scalablelayout.main import main

if __name__ == "__main__":
    main()
