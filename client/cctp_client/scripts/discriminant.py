import sys

from cctp_client.utils.solana import sighash, sighash_int


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("usage: cctp-discriminant <instruction_name>", file=sys.stderr)
        return 2
    print(sighash(argv[0]).hex())
    print(sighash_int(argv[0]))
    return 0


if __name__ == "__main__":
    sys.exit(main())
