import logging

logging.basicConfig(
    format="{asctime} - {levelname} - {message}",
    style="{",
    datefmt="%Y-%m-%d %H:%M",
    filename="fin_bending.log",
    encoding="utf-8",
    filemode="a",
    level=logging.INFO,  # Set to DEBUG to follow the load solver step by step
)


if __name__ == "__main__":
    logging.info("Logging setup complete.")
    logging.debug("Debug messages are hidden at INFO level.")
