# Tests import the package as ``src.keynd``; pytest puts this directory on
# sys.path when it loads this file.
