import sys

from shard_exporter.main import main

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\nInterrupción por teclado. Saliendo...")
