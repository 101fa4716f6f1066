import json
import logging

import requests
import typer
import yaml
from InquirerPy import inquirer
from InquirerPy.utils import color_print
from InquirerPy.validator import EmptyInputValidator
from pyfiglet import figlet_format
from yaspin import yaspin
from yaspin.spinners import Spinners

from miniminer import config
from miniminer.challenge import Challenge, ChallengeError
from miniminer.client import ChallengeClient
from miniminer.constants import DEFAULT_WORKERS, REQUEST_TIMEOUT

# Initializing cli
app = typer.Typer()


class Send:
    @staticmethod
    def success(text: str):
        color_print([("green", text)])

    @staticmethod
    def fail(text: str):
        color_print([("red", text)])

    @staticmethod
    def primary(text: str):
        color_print([("#f6ca44", text)])

    @staticmethod
    def secondary(text: str):
        color_print([("#4470f6", text)])

    @staticmethod
    def regular(text: str):
        color_print([("", text)])

    @staticmethod
    def spinner(text: str):
        return yaspin(Spinners.moon, text=text, color="cyan", timer=True)


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def show_challenge(challenge: Challenge):
    Send.primary(f"Difficulty: {challenge.difficulty}")

    formatted_data = yaml.dump(challenge.block.to_dict()["data"])

    Send.secondary(f"Block Data:\n{formatted_data}")


def solve_challenge(challenge: Challenge, workers: int) -> int:
    with Send.spinner("Solving Proof of Work") as sp:

        def progress(nonce: int):
            sp.text = f"Solving Proof of Work (nonce {nonce})"

        nonce = challenge.solve(workers=workers, progress=progress)

        sp.ok("✔")

    return nonce


@app.command()
def solve(
    domain: str = typer.Option(config.HA_DOMAIN, help="Challenge service url"),
    token: str = typer.Option(config.HA_TOKEN, help="Access token"),
    workers: int = typer.Option(
        DEFAULT_WORKERS, min=1, envvar="MINER_WORKERS", help="Search threads"
    ),
    timeout: float = typer.Option(
        REQUEST_TIMEOUT, envvar="REQUEST_TIMEOUT", help="Request timeout in seconds"
    ),
    dry_run: bool = typer.Option(False, help="Solve without submitting"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    setup_logging(verbose)

    if not domain:
        Send.fail("No challenge domain, set HA_DOMAIN or pass --domain")
        raise typer.Exit(code=1)

    if not token:
        token = inquirer.secret(
            message="Access Token:", validate=EmptyInputValidator()
        ).execute()

    with ChallengeClient(domain, token, timeout=timeout) as client:
        try:
            with Send.spinner("Fetching Challenge"):
                challenge = client.get_challenge()

        except (requests.RequestException, ChallengeError) as e:
            Send.fail(f"Could not get the challenge: {e}")
            raise typer.Exit(code=1)

        show_challenge(challenge)

        nonce = solve_challenge(challenge, workers)

        Send.success(f"Nonce found! {nonce}")
        Send.primary(f"Hash: {challenge.block.get_hash()}")

        if dry_run:
            return

        try:
            with Send.spinner("Submitting Nonce"):
                submission = client.submit(nonce)

        except requests.RequestException as e:
            Send.fail(f"Could not submit the nonce: {e}")
            raise typer.Exit(code=1)

    Send.regular(f"Response body: {submission.body}")

    if submission.ok:
        Send.success("Solved!")
    else:
        Send.fail("There was a problem with submission. Try again!")
        raise typer.Exit(code=1)


@app.command()
def verify(
    challenge_file: typer.FileText = typer.Argument(..., help="Challenge JSON"),
    nonce: int = typer.Argument(..., min=0),
):
    try:
        challenge = Challenge.from_dict(json.load(challenge_file))

    except ValueError as e:
        Send.fail(f"Invalid challenge: {e}")
        raise typer.Exit(code=1)

    if challenge.verify(nonce):
        Send.success(f"Nonce {nonce} is valid")
        Send.primary(f"Hash: {challenge.block.get_hash(nonce)}")
    else:
        Send.fail(f"Nonce {nonce} does not meet difficulty {challenge.difficulty}")
        raise typer.Exit(code=1)


@app.command()
def info():
    Send.primary(
        figlet_format("Mini Miner")
        + "Finds a nonce whose sha256 block hash starts with enough zero bits."
    )


if __name__ == "__main__":
    app()
