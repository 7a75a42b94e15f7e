"""Learn a chain from a notestock export (or load a saved one) and print generated posts."""

import argparse
import logging

import postmarkov as pm

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%H:%M:%S",
)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--export", help="notestock export zip to learn from")
    source.add_argument("--model", help="previously saved model file")
    parser.add_argument("--save", help="write the learned model to this path")
    parser.add_argument("--start", help="word every generated post begins with")
    parser.add_argument("-n", "--count", type=int, default=5, help="posts to generate")
    parser.add_argument("--pattern", default="japanese", choices=[p.lower() for p in pm.list_patterns()])
    args = parser.parse_args()

    if args.export:
        builder = pm.new_builder(args.pattern)
        failures = pm.learn_many(builder, pm.extract_corpus_file(args.export))
        print(f"learned export ({failures} lines skipped)")
        model = pm.build(builder)
        if args.save:
            pm.save_model(model, args.save)
        generator = pm.new_generator(model)
    else:
        generator = pm.from_pretrained(args.model)

    pm.set_start(generator, args.start)
    # japanese is written without spaces between words
    sep = "" if args.pattern == "japanese" else " "
    for _ in range(args.count):
        print(sep.join(pm.generate(generator)))


if __name__ == "__main__":
    main()
