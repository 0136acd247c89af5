import toml
import os

file_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), "config.toml")


def load_toml(path: str = file_path) -> dict:
    with open(path, "r") as f:
        config = toml.load(f)

    return config


if __name__ == "__main__":
    config = load_toml()
    print(config)
