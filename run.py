import sys

from parley.app import DialogueApp
from parley.settings import load_settings

def main():
    cfg = load_settings()
    DialogueApp.configure_logging(cfg)
    sys.exit(DialogueApp(cfg).run())

if __name__ == "__main__":
    main()
