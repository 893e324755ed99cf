"""CLI entry point for SiSatSet."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from dotenv import load_dotenv

from .config import SisatsetConfig, load_config
from .db import RecordStore, StoreError
from .notify import SCHEDULE_UPDATED, UpdateNotifier
from .quickinput import DOMAINS, KnownEntity, load_children, run_quick_input

logger = logging.getLogger(__name__)

# domain → word used in user-facing messages
_LABELS: dict[str, str] = {
    "event": "event",
    "homework": "PR",
    "schedule": "jadwal",
    "shopping": "item",
    "note": "catatan",
}

_SHOW_TABLES: dict[str, str] = {
    "events": "event_date",
    "homework": "deadline",
    "schedules": "day_of_week",
    "shopping": "created_at",
    "notes": "created_at",
}

_COLORS = ["#FF6B9D", "#FF8C42", "#FFD93D", "#6BCF7F", "#4ECDC4", "#A78BFA"]


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="sisatset",
        description="SiSatSet: catat jadwal, PR, event, dan belanja dari teks WhatsApp",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path file konfigurasi (TOML)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Tampilkan log debug"
    )

    sub = parser.add_subparsers(dest="command")

    # quick
    quick_parser = sub.add_parser("quick", help="Proses teks quick input dan simpan")
    quick_parser.add_argument("domain", choices=DOMAINS)
    quick_parser.add_argument(
        "--file", "-f", type=str, default=None,
        help="Baca teks dari file (default: stdin)",
    )
    quick_parser.add_argument(
        "--child", type=str, default=None, help="Nama anak yang dipilih"
    )
    quick_parser.add_argument(
        "--dry-run", action="store_true", help="Hanya tampilkan hasil, tanpa menyimpan"
    )
    quick_parser.add_argument("--json", action="store_true", help="Output format JSON")

    # children
    children_parser = sub.add_parser("children", help="Kelola data anak")
    children_sub = children_parser.add_subparsers(dest="children_command")
    children_sub.add_parser("list", help="Daftar anak")
    add_parser = children_sub.add_parser("add", help="Tambah anak")
    add_parser.add_argument("name", type=str)
    add_parser.add_argument("--grade", type=str, default="")
    add_parser.add_argument("--color", type=str, default=None)

    # show
    show_parser = sub.add_parser("show", help="Tampilkan data tersimpan")
    show_parser.add_argument("table", choices=list(_SHOW_TABLES))
    show_parser.add_argument("--json", action="store_true", help="Output format JSON")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = load_config(args.config)

    with RecordStore(config.database.path) as store:
        match args.command:
            case "quick":
                _cmd_quick(config, store, args)
            case "children":
                _cmd_children(config, store, args)
            case "show":
                _cmd_show(config, store, args)


def _read_text(path: str | None) -> str:
    if path:
        return Path(path).read_text(encoding="utf-8")
    return sys.stdin.read()


def _resolve_child(
    children: list[KnownEntity], name: str | None
) -> KnownEntity | None:
    if not name:
        return None
    wanted = name.strip().lower()
    for child in children:
        if child.name.lower() == wanted:
            return child
    return None


def _cmd_quick(config: SisatsetConfig, store: RecordStore, args) -> None:
    user_id = config.household.user_id
    children = load_children(store, user_id)

    child_name = args.child or config.household.default_child
    selected = _resolve_child(children, child_name)
    if child_name and selected is None:
        print(f"Anak tidak ditemukan: {child_name}", file=sys.stderr)
        sys.exit(1)
    if args.domain == "schedule" and selected is None and not args.dry_run:
        print("Pilih anak terlebih dahulu! (--child)", file=sys.stderr)
        sys.exit(1)

    try:
        text = _read_text(args.file)
    except OSError as e:
        print(f"Gagal membaca input: {e}", file=sys.stderr)
        sys.exit(1)

    if not text.strip():
        print("Teks kosong.", file=sys.stderr)
        sys.exit(1)

    notifier = UpdateNotifier()
    notifier.subscribe(
        SCHEDULE_UPDATED,
        lambda topic, payload: logger.info("%s: %s", topic, payload),
    )

    result = asyncio.run(run_quick_input(
        store,
        args.domain,
        text,
        user_id=user_id,
        children=children,
        selected_child=selected.id if selected else None,
        config=config.quick_input,
        notifier=notifier,
        dry_run=args.dry_run,
    ))

    label = _LABELS[args.domain]
    if not result.detected:
        print(f"Tidak ada {label} yang terdeteksi!")
        return

    if args.json:
        data = {
            "domain": result.domain,
            "drafts": [asdict(d) for d in result.drafts],
        }
        if result.submission is not None:
            data["attempted"] = result.submission.attempted
            data["succeeded"] = result.submission.succeeded
            data["failures"] = [asdict(f) for f in result.submission.failures]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    for draft in result.drafts:
        print(f"  • {_describe(draft)}")

    if result.submission is None:
        print(f"\n{result.count} {label} terdeteksi (tidak disimpan).")
        return

    verb = "menyimpan" if args.domain == "schedule" else "menambahkan"
    print(f"\nBerhasil {verb} {result.count} {label}!")
    if result.submission.failures:
        print(
            f"{len(result.submission.failures)} {label} gagal disimpan.",
            file=sys.stderr,
        )


def _describe(draft) -> str:
    data = asdict(draft)
    if "title" in data:
        when = f"{data['date']} {data['time']}".strip()
        return f"[{data['category']}] {data['title']} @ {when}"
    if "subject" in data:
        desc = f": {data['description']}" if data["description"] else ""
        return f"{data['subject']}{desc} (deadline {data['deadline']})"
    if "day_of_week" in data:
        subjects = ", ".join(data["subjects"]) or "-"
        extra = [v for v in (data["school_hours"], data["uniform"]) if v]
        suffix = f" | {' | '.join(extra)}" if extra else ""
        return f"{data['day_of_week'].capitalize()}: {subjects}{suffix}"
    if "quantity" in data:
        price = f" Rp{data['price']:,}".replace(",", ".") if data["price"] else ""
        return f"{data['name']} {data['quantity']}{price} [{data['category']}]"
    return data["content"]


def _cmd_children(config: SisatsetConfig, store: RecordStore, args) -> None:
    user_id = config.household.user_id

    match args.children_command:
        case "add":
            existing = store.query("children", {"user_id": user_id})
            color = args.color or _COLORS[len(existing) % len(_COLORS)]
            try:
                store.insert(
                    "children",
                    {
                        "user_id": user_id,
                        "name": args.name.strip(),
                        "grade": args.grade,
                        "color": color,
                    },
                )
            except StoreError as e:
                print(f"Gagal menambahkan anak: {e}", file=sys.stderr)
                sys.exit(1)
            print(f"Anak ditambahkan: {args.name}")
        case _:
            children = store.query("children", {"user_id": user_id})
            if not children:
                print("Belum ada data anak.")
                return
            print(f"Anak: {len(children)}")
            for child in children:
                grade = f" (kelas {child['grade']})" if child["grade"] else ""
                print(f"  {child['name']}{grade}")


def _cmd_show(config: SisatsetConfig, store: RecordStore, args) -> None:
    table = "shopping_list" if args.table == "shopping" else args.table
    user_id = config.household.user_id
    filters = {}
    if table in ("events", "shopping_list", "notes"):
        filters["user_id"] = user_id
    else:
        # homework and schedules belong to the household through its children
        filters["child_id"] = [c.id for c in load_children(store, user_id)]

    rows = store.query(table, filters, order_by=_SHOW_TABLES[args.table])
    if args.json:
        print(json.dumps(rows, ensure_ascii=False, indent=2))
        return
    if not rows:
        print("Tidak ada data.")
        return
    for row in rows:
        fields = {k: v for k, v in row.items() if k not in ("id", "user_id", "created_at")}
        print("  " + ", ".join(f"{k}={v}" for k, v in fields.items()))
