import os, sys, signal, threading
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))
from w1temp.errors import ConfigError, DiscoveryError
from w1temp.logging_config import setup_logging, resolve_logging_from_env_and_cfg
from w1temp.runtime import load_config, build_watcher, run

STOP = threading.Event()
def handle_sig(sig, frame):
    STOP.set()

def main():
    try:
        cfg = load_config(os.getenv("W1T_CONFIG"))
    except ConfigError as e:
        print(f"[APP] {e}", file=sys.stderr); return 2
    setup_logging(*resolve_logging_from_env_and_cfg(cfg))
    try:
        watcher = build_watcher(cfg)
    except DiscoveryError as e:
        print(f"[APP] Failed loading temp sensors: {e}", file=sys.stderr); return 1
    signal.signal(signal.SIGINT, handle_sig); signal.signal(signal.SIGTERM, handle_sig)
    print("[APP] Watching sensor. Ctrl+C to exit.")
    run(watcher, STOP)
    print("[APP] Stopped.")
    return 0

if __name__ == "__main__":
    sys.exit(main())
