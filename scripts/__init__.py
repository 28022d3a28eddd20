"""One-off maintenance, seed and smoke-check scripts.

Each module is run from the repository root with
`python -m scripts.<name>` and returns a process exit code from `main()`;
the root modules (`database`, `tokens`, `payments`, ...) hold the logic.
"""
