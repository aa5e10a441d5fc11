import argparse, logging, sys
from delayproof.errors import MalformedInput
from delayproof.params import Parameters
from delayproof.vdf.trade import generate_seed, generate_vdf, is_valid_vdf


def add_context_args(parser: argparse.ArgumentParser):
    parser.add_argument("--origin", required=True, help="20-byte origin address")
    parser.add_argument(
        "--path", nargs="*", default=[], help="ordered 20-byte path addresses"
    )
    parser.add_argument("--qty-in", required=True, help="known input quantity")
    parser.add_argument("--qty-out", required=True, help="known output quantity")


def add_vdf_args(parser: argparse.ArgumentParser):
    add_context_args(parser)
    parser.add_argument("-n", default=str(Parameters.n), help="RSA modulus")
    parser.add_argument("-t", "--delay", default=str(Parameters.T), help="squarings")
    parser.add_argument("--block-hash", required=True, help="32-byte anchor hash")


def context(args: argparse.Namespace) -> dict:
    return dict(
        origin=args.origin,
        path=args.path,
        known_qty_in=args.qty_in,
        known_qty_out=args.qty_out,
    )


def cmd_seed(args: argparse.Namespace) -> int:
    print(generate_seed(args.origin, args.path, args.qty_in, args.qty_out))
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    def show(i: int):
        sys.stderr.write(f"\r{i + 1}/{args.delay}")
        sys.stderr.flush()

    proof = generate_vdf(
        n=args.n,
        T=args.delay,
        block_hash=args.block_hash,
        block_number=args.block_number,
        on_progress=show if args.progress else None,
        **context(args),
    )
    if args.progress:
        sys.stderr.write("\n")
    print(proof)
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    ok = is_valid_vdf(
        n=args.n,
        T=args.delay,
        block_hash=args.block_hash,
        proof=args.proof,
        **context(args),
    )
    print("valid" if ok else "invalid")
    return 0 if ok else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="delayproof", description="Wesolowski VDF proofs for trades"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="logging level",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="print the seed of a trade context")
    add_context_args(seed)
    seed.set_defaults(func=cmd_seed)

    gen = sub.add_parser("generate", help="evaluate the VDF and print the proof")
    add_vdf_args(gen)
    gen.add_argument("--block-number", required=True, help="anchor block number")
    gen.add_argument("--progress", action="store_true", help="show progress")
    gen.set_defaults(func=cmd_generate)

    ver = sub.add_parser("verify", help="check a proof blob")
    add_vdf_args(ver)
    ver.add_argument("--proof", required=True, help="0x-prefixed proof blob")
    ver.set_defaults(func=cmd_verify)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level)
    try:
        return args.func(args)
    except MalformedInput as e:
        sys.stderr.write(f"error: {e}\n")
        return 2


if __name__ == "__main__":
    sys.exit(main())
