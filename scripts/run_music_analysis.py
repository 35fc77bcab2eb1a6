import argparse
import os
import subprocess
import sys


def build_environment(config_path: str | None, environment: str | None, output_path: str | None) -> dict[str, str]:
    """
    Return the process environment with the pipeline settings overridden.

    Args:
        config_path: YAML file holding the snapshot paths (FILE_PATH_CONFIG_PATH).
        environment: Entry of the path configuration to read (ENVIRONMENT).
        output_path: Directory or URL where report files are written (OUTPUT_BASE_PATH).
    """
    env = dict(os.environ)
    overrides = {
        "FILE_PATH_CONFIG_PATH": config_path,
        "ENVIRONMENT": environment,
        "OUTPUT_BASE_PATH": output_path,
    }
    env.update({key: value for key, value in overrides.items() if value})
    return env


def run_music_analysis(selection: str, env: dict[str, str]) -> int:
    """
    Materialize the selected music assets through the Dagster CLI.

    Args:
        selection: The asset selection, e.g. "group:music" or "music/reports/dataset_overview".
        env: Environment the Dagster process runs with.

    Returns:
        The exit code of the Dagster process.
    """
    command = ["dagster", "asset", "materialize", "-m", "src.main", "--select", selection]
    print(f"Running: {' '.join(command)} (ENVIRONMENT={env.get('ENVIRONMENT', 'local')})")

    try:
        completed = subprocess.run(command, env=env, check=False)
    except FileNotFoundError:
        print("Error: 'dagster' command not found. Install the project with `pip install -e .`", file=sys.stderr)
        return 1

    if completed.returncode:
        print(f"Materialization of {selection} failed with exit code {completed.returncode}", file=sys.stderr)
    return completed.returncode


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Materialize the music insight assets.")
    parser.add_argument("selection", nargs="?", default="group:music", help="Dagster asset selection.")
    parser.add_argument("--config-path", help="Path configuration file, overrides FILE_PATH_CONFIG_PATH.")
    parser.add_argument("--environment", help="Path configuration entry, e.g. local or prod.")
    parser.add_argument("--output-path", help="Where report files are written, overrides OUTPUT_BASE_PATH.")
    args = parser.parse_args()

    sys.exit(run_music_analysis(args.selection, build_environment(args.config_path, args.environment, args.output_path)))
