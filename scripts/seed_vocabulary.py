"""Seed the vocabulary catalog from a CSV of Portuguese/English pairs."""
from __future__ import annotations

import csv
import sys
from pathlib import Path
from sqlalchemy import func, select
from sqlalchemy.orm import Session

sys.path.append(str(Path(__file__).resolve().parent.parent))

from vocab_progress.db.models.vocabulary import VocabularyWord
from vocab_progress.db.session import SessionLocal


def split_examples(value: str | None) -> list[str]:
    """Examples are stored in a single cell separated by ``|``."""

    if not value:
        return []
    return [item.strip() for item in value.split("|") if item.strip()]


def load_vocabulary_from_csv(csv_path: str) -> int:
    """Load vocabulary from CSV file into the database, skipping existing terms."""

    db: Session = SessionLocal()
    loaded = 0

    try:
        with open(csv_path, "r", encoding="utf-8") as file:
            reader = csv.DictReader(file)

            for row in reader:
                portuguese = (row.get("portuguese") or "").strip()
                english = (row.get("english") or "").strip()
                if not portuguese or not english:
                    continue

                existing = db.scalars(
                    select(VocabularyWord).where(
                        func.lower(VocabularyWord.portuguese) == portuguese.lower()
                    )
                ).first()
                if existing:
                    continue

                db.add(
                    VocabularyWord(
                        portuguese=portuguese,
                        english=english,
                        part_of_speech=row.get("part_of_speech") or None,
                        gender=row.get("gender") or None,
                        difficulty=row.get("difficulty") or "beginner",
                        group=row.get("group") or None,
                        examples=split_examples(row.get("examples")),
                    )
                )
                loaded += 1

                if loaded % 100 == 0:
                    db.commit()
                    print(f"Loaded {loaded} words...")

            db.commit()
            return loaded

    except Exception as exc:  # pragma: no cover - CLI feedback
        db.rollback()
        print(f"Error loading vocabulary: {exc}")
        raise
    finally:
        db.close()


def generate_sample_csv(output_path: Path | None = None) -> Path:
    """Generate a sample vocabulary CSV."""

    sample_data = [
        ["portuguese", "english", "part_of_speech", "gender", "difficulty", "group", "examples"],
        ["olá", "hello", "interjection", "", "beginner", "Greetings", "Olá, tudo bem?"],
        ["obrigado", "thank you", "interjection", "", "beginner", "Greetings", "Muito obrigado!"],
        ["por favor", "please", "phrase", "", "beginner", "Greetings", "Um café, por favor."],
        ["pão", "bread", "noun", "masculine", "beginner", "Food", "Eu compro pão todos os dias."],
        ["queijo", "cheese", "noun", "masculine", "beginner", "Food", "O queijo é da Serra da Estrela."],
        ["água", "water", "noun", "feminine", "beginner", "Food", "Quero um copo de água.|A água está fria."],
        ["comer", "to eat", "verb", "", "beginner", "Verbs", "Vamos comer agora."],
        ["beber", "to drink", "verb", "", "beginner", "Verbs", "Ele gosta de beber chá."],
        ["falar", "to speak", "verb", "", "beginner", "Verbs", "Você fala português?"],
        ["casa", "house", "noun", "feminine", "beginner", "Home", "A casa é grande."],
        ["saudade", "longing", "noun", "feminine", "advanced", "", "Tenho saudade de Lisboa."],
        ["rua", "street", "noun", "feminine", "beginner", "Places", "Moro nesta rua."],
    ]

    output_path = output_path or Path("vocabulary_pt_sample.csv")

    with open(output_path, "w", encoding="utf-8", newline="") as file:
        writer = csv.writer(file)
        writer.writerows(sample_data)

    print(f"Sample CSV generated: {output_path}")
    return output_path


if __name__ == "__main__":  # pragma: no cover - CLI execution
    import argparse

    parser = argparse.ArgumentParser(description="Seed vocabulary database")
    parser.add_argument("--csv", type=str, help="Path to CSV file")
    parser.add_argument(
        "--generate-sample",
        action="store_true",
        help="Generate sample CSV",
    )

    args = parser.parse_args()

    if args.generate_sample:
        generate_sample_csv()
    elif args.csv:
        count = load_vocabulary_from_csv(args.csv)
        print(f"Successfully loaded {count} words")
    else:
        parser.error("Please specify --csv path or --generate-sample")
