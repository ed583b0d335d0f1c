"""The Command Line Interface for the utility, including Interactive elements.

What I would call a hybrid CLI/ICLI (Command Line Interface/Interactive Command Lice Interface) that automagically
generates the INTERACTIVE part on-the-fly based on the missing components of the CLI interaction, including the
option that none are included.

Typical usage example:

    rsakeyconv convert --source-format PKCS1 --target-format XML --input key.pem
    OR
    python -m rsakeyconv
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import rsakeyconv
from rsakeyconv import convert
from rsakeyconv import keygen
from rsakeyconv import pem

FORMAT_CHOICES = [fmt.value for fmt in rsakeyconv.KeyFormat]


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in RSA Key Conv.",
            choices=["keygen", "convert", "encrypt", "decrypt", "sign", "verify"],
        ),
    "keygen":
        HelpData("Key pair generation utility."),
    "convert":
        HelpData("Key format conversion utility."),
    "encrypt":
        HelpData("Encryption utility."),
    "decrypt":
        HelpData("Decryption utility."),
    "sign":
        HelpData("Signing utility."),
    "verify":
        HelpData("Signature verification utility."),
    "XML":
        HelpData("XML RSAKeyValue element."),
    "PKCS1":
        HelpData("PEM PKCS1 private key, SubjectPublicKeyInfo public key."),
    "PKCS8":
        HelpData("PEM PKCS8 private key, SubjectPublicKeyInfo public key."),
    "key_format":
        HelpData(description="Format of the key files.", choices=FORMAT_CHOICES, default="PKCS8"),
    "source_format":
        HelpData(description="Format of the key to convert.", choices=FORMAT_CHOICES),
    "target_format":
        HelpData(description="Format to convert the key to.", choices=FORMAT_CHOICES),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
        ),
    "input":
        HelpData(
            description="Location of the key file to convert.",
            format=pathlib.Path,
        ),
    "output":
        HelpData(
            description="Location of the converted key file. Use `-` for standard output.",
            format=pathlib.Path,
            default="-",
        ),
    "public":
        HelpData(
            description="Is the key to convert a public key?",
            choices=["Y", "N"],
            advanced=True,
            default="N",
        ),
    "unwrapped":
        HelpData(
            description="Strip the PEM envelope and line breaks from PKCS1/PKCS8 output?",
            choices=["Y", "N"],
            advanced=True,
            default="N",
        ),
    "message":
        HelpData(
            description="Message or path to file containing payload. If Path start with `P:`",
            format=str,
        ),
    "encoding":
        HelpData(description="Payload encoding.", choices=["utf-8", "utf-16", "ascii"], advanced=True, default="utf-8"),
    "keysize":
        HelpData(
            description="Key size (in bits).",
            choices=["1024", "2048", "3072", "4096"],
            default="2048",
        ),
    "pub_exponent":
        HelpData(
            description="Exponent for the public key.",
            format=int,
            advanced=True,
            default=keygen.DEFAULT_EXPONENT,
        ),
    "padding":
        HelpData(description="Encryption padding.", choices=["oaep", "pkcs1v15"], advanced=True, default="oaep"),
    "sig_padding":
        HelpData(description="Signature padding.", choices=["pkcs1v15", "pss"], advanced=True, default="pkcs1v15"),
    "sha":
        HelpData(description="Specific SHA algorithm to use",
                 choices=["sha1", "sha256", "sha384", "sha512"],
                 advanced=True,
                 default="sha256"),
    "signature":
        HelpData(
            description="The signature to validate against the payload and public key.",
            format=str,
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("key_format", "public_key", "private_key", "keysize", "pub_exponent", "unwrapped"),
    "convert": ("source_format", "target_format", "input", "output", "public", "unwrapped"),
    "encrypt": ("key_format", "public_key", "message", "padding", "sha", "encoding"),
    "decrypt": ("key_format", "private_key", "message", "padding", "sha", "encoding"),
    "sign": ("key_format", "private_key", "message", "sig_padding", "sha", "encoding"),
    "verify": ("key_format", "public_key", "message", "signature", "sig_padding", "sha", "encoding"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
keyfmt = argparse.ArgumentParser(add_help=False)
keyfmt.add_argument("--key-format", "-f", choices=help_dict["key_format"].choices,
                    help=help_dict["key_format"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", type=help_dict["message"].format, help=help_dict["message"].description)
encp = argparse.ArgumentParser(add_help=False)
encp.add_argument("--encoding", "-e", choices=help_dict["encoding"].choices, help=help_dict["encoding"].description)
sha = argparse.ArgumentParser(add_help=False)
sha.add_argument("--sha", "-s", choices=help_dict["sha"].choices, help=help_dict["sha"].description)
unwr = argparse.ArgumentParser(add_help=False)
unwr.add_argument("--unwrapped", "-u", action="store_const", const="Y", help=help_dict["unwrapped"].description)
corep = argparse.ArgumentParser(prog="rsakeyconv")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsakeyconv.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Enable debug logging")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen_cmd = commands.add_parser("keygen", parents=[keyfmt, privkey, pubkey, unwr], help=help_dict["keygen"].description)
keygen_cmd.add_argument("--keysize", choices=help_dict["keysize"].choices, help=help_dict["keysize"].description)
keygen_cmd.add_argument("--pub-exponent",
                        type=help_dict["pub_exponent"].format,
                        help=help_dict["pub_exponent"].description)
keygen_cmd.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

convert_cmd = commands.add_parser("convert", parents=[unwr], help=help_dict["convert"].description)
convert_cmd.add_argument("--source-format", choices=help_dict["source_format"].choices,
                         help=help_dict["source_format"].description)
convert_cmd.add_argument("--target-format", choices=help_dict["target_format"].choices,
                         help=help_dict["target_format"].description)
convert_cmd.add_argument("--input", "-i", type=help_dict["input"].format, help=help_dict["input"].description)
convert_cmd.add_argument("--output", "-O", type=help_dict["output"].format, help=help_dict["output"].description)
convert_cmd.add_argument("--public", action="store_const", const="Y", help=help_dict["public"].description)

encrypt_cmd = commands.add_parser("encrypt",
                                  parents=[keyfmt, pubkey, payloads, sha, encp],
                                  help=help_dict["encrypt"].description)
encrypt_cmd.add_argument("--padding", choices=help_dict["padding"].choices, help=help_dict["padding"].description)
decrypt_cmd = commands.add_parser("decrypt",
                                  parents=[keyfmt, privkey, payloads, sha, encp],
                                  help=help_dict["decrypt"].description)
decrypt_cmd.add_argument("--padding", choices=help_dict["padding"].choices, help=help_dict["padding"].description)

sign_cmd = commands.add_parser("sign", parents=[keyfmt, privkey, payloads, sha, encp], help=help_dict["sign"].description)
sign_cmd.add_argument("--sig-padding", choices=help_dict["sig_padding"].choices,
                      help=help_dict["sig_padding"].description)
verify_cmd = commands.add_parser("verify",
                                 parents=[keyfmt, pubkey, payloads, sha, encp],
                                 help=help_dict["verify"].description)
verify_cmd.add_argument("--signature", "-S", type=help_dict["signature"].format, help=help_dict["signature"].description)
verify_cmd.add_argument("--sig-padding", choices=help_dict["sig_padding"].choices,
                        help=help_dict["sig_padding"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def check_message(mess: str, enc) -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        mess = mess[2:]
        with open(mess, "r", encoding=enc) as f:
            mess = f.read()
    return mess


def execute(args: argparse.Namespace, pspr: typing.Callable, pstatus: tuple[bool, bool]) -> None:
    """Runs the fully specified subcommand."""
    match args.subcommand:
        case "keygen":
            private_key, public_key = pathlib.Path(args.private_key), pathlib.Path(args.public_key)
            if private_key.exists() or public_key.exists():
                rs = getattr(args, "overwrite", None)
                if rs is None:
                    rs = choice_handler("overwrite", pstatus, pspr)
                if rs == "N":
                    print("Destination private or public key already exists!")
                    return
            priv_text, pub_text = keygen.generate_key_pair(args.key_format, int(args.keysize), args.unwrapped == "N",
                                                           int(args.pub_exponent))
            pem.write_key_file(private_key, priv_text)
            pem.write_key_file(public_key, pub_text)
            pspr("\nKey pair generated!")
        case "convert":
            result = convert.convert_key(pem.read_key_file(args.input),
                                         args.source_format,
                                         args.target_format,
                                         private=args.public == "N",
                                         wrapped=args.unwrapped == "N")
            if str(args.output) == "-":
                pspr("Converted key:")
                print(result)
            else:
                pem.write_key_file(pathlib.Path(args.output), result)
                pspr(f"\nKey written to {args.output}!")
        case "encrypt":
            args.message = check_message(args.message, args.encoding)
            util = rsakeyconv.RSAUtil(public_key=pem.read_key_file(args.public_key),
                                      key_format=args.key_format,
                                      encoding=args.encoding)
            ciph = util.encrypt(args.message, args.padding, args.sha)
            pspr("Ciphertext:")
            print(ciph)
        case "decrypt":
            args.message = check_message(args.message, "ascii")
            util = rsakeyconv.RSAUtil(private_key=pem.read_key_file(args.private_key),
                                      key_format=args.key_format,
                                      encoding=args.encoding)
            clear = util.decrypt(args.message.strip(), args.padding, args.sha)
            pspr("Cleartext:")
            print(clear)
        case "sign":
            args.message = check_message(args.message, args.encoding)
            util = rsakeyconv.RSAUtil(private_key=pem.read_key_file(args.private_key),
                                      key_format=args.key_format,
                                      encoding=args.encoding)
            signature = util.sign(args.message, args.sha, args.sig_padding)
            pspr("Signature:")
            print(signature)
        case "verify":
            args.message = check_message(args.message, args.encoding)
            util = rsakeyconv.RSAUtil(public_key=pem.read_key_file(args.public_key),
                                      key_format=args.key_format,
                                      encoding=args.encoding)
            if util.verify(args.message, args.signature, args.sha, args.sig_padding):
                pspr("Signature Verified!")
            else:
                print("Signature Verification Failed!")
                sys.exit(1)


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Lice Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to RSA Key Conv!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    try:
        execute(args, pspr, pstatus)
    except rsakeyconv.RSAKeyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)
    pspr("Thank you for using RSA Key Conv!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
