#!/usr/bin/env python3
"""
TODO管理CLI - スナップショットファイル経由でTodoStoreを操作するコマンドラインインターフェース

Usage:
    python -m src.todo.cli list [--offset N] [--limit N] [--format json|text]
    python -m src.todo.cli page --page N [--page-size N] [--format json|text]
    python -m src.todo.cli add --name "名前" [--description "詳細"]
    python -m src.todo.cli update --id ID [--name "新しい名前"] [--description "新詳細"] [--completed | --not-completed]
    python -m src.todo.cli complete --id ID
    python -m src.todo.cli delete --id ID
    python -m src.todo.cli get --id ID [--format json|text]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import TodoNotFoundError, TodoSnapshotError
from .models import TodoItem
from .snapshot import load_store, save_store
from .store import TodoStore


def format_todo_text(todo: TodoItem) -> str:
    """Todoアイテムをテキスト形式で整形"""
    mark = "x" if todo.is_completed else " "
    description = todo.description.strip() or "説明なし"
    return f"[{todo.id}] [{mark}] {todo.name} | {description}"


def format_todo_json(todo: TodoItem) -> Dict[str, Any]:
    """Todoアイテムを辞書形式に変換"""
    return todo.to_dict()


def print_todos(items: List[TodoItem], output_format: str) -> None:
    if output_format == "json":
        print(json.dumps([format_todo_json(item) for item in items], ensure_ascii=False))
    elif not items:
        print("TODOは登録されていません。")
    else:
        for item in items:
            print(format_todo_text(item))


def print_not_found(todo_id: int) -> int:
    print(f"Error: ID {todo_id} のTODOが見つかりません。", file=sys.stderr)
    return 1


def cmd_list(store: TodoStore, offset: int, limit: Optional[int], output_format: str) -> int:
    """Todoリストを表示"""
    print_todos(store.get_todos(offset, limit), output_format)
    return 0


def cmd_page(store: TodoStore, page: int, page_size: Optional[int], output_format: str) -> int:
    """ページ番号指定でTodoリストを表示"""
    print_todos(store.get_todos_page(page, page_size), output_format)
    return 0


def cmd_add(store: TodoStore, name: str, description: str, output_format: str) -> int:
    """新しいTodoを追加"""
    todo_id = store.create_todo(name, description)
    created = store.get_todo(todo_id)
    if output_format == "json":
        print(json.dumps(format_todo_json(created), ensure_ascii=False))
    else:
        print(f"追加しました: {format_todo_text(created)}")
    return 0


def cmd_update(
    store: TodoStore,
    todo_id: int,
    name: Optional[str],
    description: Optional[str],
    is_completed: Optional[bool],
    output_format: str,
) -> int:
    """既存のTodoを更新"""
    try:
        store.update_todo(
            todo_id,
            name=name,
            description=description,
            is_completed=is_completed,
        )
    except TodoNotFoundError:
        return print_not_found(todo_id)

    updated = store.get_todo(todo_id)
    if output_format == "json":
        print(json.dumps(format_todo_json(updated), ensure_ascii=False))
    else:
        print(f"更新しました: {format_todo_text(updated)}")
    return 0


def cmd_complete(store: TodoStore, todo_id: int, output_format: str) -> int:
    """Todoを完了状態にする"""
    try:
        store.update_todo(todo_id, is_completed=True)
    except TodoNotFoundError:
        return print_not_found(todo_id)

    completed = store.get_todo(todo_id)
    if output_format == "json":
        print(json.dumps(format_todo_json(completed), ensure_ascii=False))
    else:
        print(f"完了しました: {format_todo_text(completed)}")
    return 0


def cmd_delete(store: TodoStore, todo_id: int, output_format: str) -> int:
    """Todoを削除"""
    try:
        store.delete_todo(todo_id)
    except TodoNotFoundError:
        return print_not_found(todo_id)

    if output_format == "json":
        print(json.dumps({"deleted": True, "id": todo_id}, ensure_ascii=False))
    else:
        print(f"削除しました: ID {todo_id}")
    return 0


def cmd_get(store: TodoStore, todo_id: int, output_format: str) -> int:
    """特定のTodoを取得"""
    try:
        todo = store.get_todo(todo_id)
    except TodoNotFoundError:
        return print_not_found(todo_id)

    if output_format == "json":
        print(json.dumps(format_todo_json(todo), ensure_ascii=False))
    else:
        print(format_todo_text(todo))
    return 0


MUTATING_COMMANDS = {"add", "update", "complete", "delete"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TODO管理CLI - スナップショットファイルに状態を保存するインターフェース",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--state-file",
        type=str,
        help="スナップショットJSONのパス（デフォルト: data/todos.json）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    format_parent = argparse.ArgumentParser(add_help=False)
    format_parent.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="出力フォーマット（デフォルト: text）",
    )

    # list コマンド
    parser_list = subparsers.add_parser("list", parents=[format_parent], help="TODOリストを表示")
    parser_list.add_argument("--offset", type=int, default=0, help="開始位置（0始まり）")
    parser_list.add_argument("--limit", type=int, help="最大件数（省略時は末尾まで）")

    # page コマンド
    parser_page = subparsers.add_parser(
        "page", parents=[format_parent], help="ページ番号でTODOリストを表示"
    )
    parser_page.add_argument("--page", type=int, required=True, help="ページ番号（1始まり）")
    parser_page.add_argument("--page-size", type=int, help="1ページの件数（デフォルト: 10）")

    # add コマンド
    parser_add = subparsers.add_parser("add", parents=[format_parent], help="新しいTODOを追加")
    parser_add.add_argument("--name", required=True, help="TODOの名前")
    parser_add.add_argument("--description", default="", help="TODOの詳細説明")

    # update コマンド
    parser_update = subparsers.add_parser(
        "update", parents=[format_parent], help="既存のTODOを更新"
    )
    parser_update.add_argument("--id", type=int, required=True, help="更新するTODOのID")
    parser_update.add_argument("--name", help="新しい名前")
    parser_update.add_argument("--description", help="新しい詳細説明")
    completed_group = parser_update.add_mutually_exclusive_group()
    completed_group.add_argument(
        "--completed",
        dest="is_completed",
        action="store_const",
        const=True,
        help="完了にする",
    )
    completed_group.add_argument(
        "--not-completed",
        dest="is_completed",
        action="store_const",
        const=False,
        help="未完了に戻す",
    )

    # complete コマンド
    parser_complete = subparsers.add_parser(
        "complete", parents=[format_parent], help="TODOを完了状態にする"
    )
    parser_complete.add_argument("--id", type=int, required=True, help="完了するTODOのID")

    # delete コマンド
    parser_delete = subparsers.add_parser("delete", parents=[format_parent], help="TODOを削除")
    parser_delete.add_argument("--id", type=int, required=True, help="削除するTODOのID")

    # get コマンド
    parser_get = subparsers.add_parser("get", parents=[format_parent], help="特定のTODOを取得")
    parser_get.add_argument("--id", type=int, required=True, help="取得するTODOのID")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLIエントリポイント"""
    args = build_parser().parse_args(argv)
    state_file = Path(args.state_file) if args.state_file else None

    try:
        store = load_store(state_file)
    except TodoSnapshotError as exc:
        print(f"Error: スナップショットを読み込めません: {exc}", file=sys.stderr)
        return 1

    if args.command == "list":
        code = cmd_list(store, args.offset, args.limit, args.format)
    elif args.command == "page":
        code = cmd_page(store, args.page, args.page_size, args.format)
    elif args.command == "add":
        code = cmd_add(store, args.name, args.description, args.format)
    elif args.command == "update":
        code = cmd_update(
            store,
            args.id,
            args.name,
            args.description,
            args.is_completed,
            args.format,
        )
    elif args.command == "complete":
        code = cmd_complete(store, args.id, args.format)
    elif args.command == "delete":
        code = cmd_delete(store, args.id, args.format)
    elif args.command == "get":
        code = cmd_get(store, args.id, args.format)
    else:
        print(f"Error: 不明なコマンド: {args.command}", file=sys.stderr)
        return 1

    if code == 0 and args.command in MUTATING_COMMANDS:
        save_store(store, state_file)
    return code


if __name__ == "__main__":
    sys.exit(main())
