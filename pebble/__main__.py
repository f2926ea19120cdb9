import sys

from pebble.interpreter.repl import main

sys.exit(main())
