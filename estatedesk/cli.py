"""Command line desk for property staff: navigation and the staff pages."""

from __future__ import annotations

import argparse
import sqlite3
import sys
from contextlib import closing
from typing import Callable, Iterable, Sequence

from estatedesk.leaves import LeaveBook
from estatedesk.payments import PaymentLedger
from estatedesk.repairs import RepairOrderBook
from estatedesk.roster import RosterQuery, parse_staff_id
from estatedesk.visitors import HEADERS as VISITOR_HEADERS
from estatedesk.visitors import VisitorLog, VisitorSearch

DEFAULT_DB = "try.db"

_NAVIGATION = (
    ("日常工作", ("出勤打卡", "房屋出租管理", "报修工单处理")),
    ("业主服务", ("访客登记", "缴费查询")),
    ("个人中心", ("排班查询", "通知公告", "请销假")),
    ("车辆记录", ("车辆登记", "车辆进出记录")),
)

# Pages reachable from the command line, by their navigation title.
_PAGE_COMMANDS = {
    "报修工单处理": "repairs",
    "访客登记": "visitors",
    "缴费查询": "payments",
    "排班查询": "roster",
    "请销假": "leaves",
}

_REPAIR_HEADERS = (
    "报修编号", "报修人用户名", "业主姓名", "业主地址", "报修时间",
    "报修描述", "报修状态", "维修日期", "处理人", "评价",
)
_PAYMENT_HEADERS = (
    "订单编号", "缴费周期", "缴费类型", "应付", "实付", "缴费时间",
    "缴费人用户名", "缴费人姓名", "家庭地址", "联系电话", "缴费方式",
)
_ROSTER_HEADERS = (
    "排班ID", "员工ID", "员工姓名", "部门", "职位",
    "日期", "班次", "电话号码", "排班人ID", "排班人",
)
_PENDING_HEADERS = (
    "员工ID", "姓名", "开始日期", "结束日期", "请假原因", "审核进度", "审核结果", "审核人ID",
)
_APPROVED_HEADERS = _PENDING_HEADERS + ("审核人姓名", "审核时间")

_SEARCH_TYPES = {
    "name": VisitorSearch.NAME,
    "address": VisitorSearch.ADDRESS,
    "date": VisitorSearch.DATE,
}

Table = list[tuple[str, ...]]


def navigation() -> tuple[tuple[str, tuple[str, ...]], ...]:
    """The staff navigation tree: sections and their pages, in display order."""
    return _NAVIGATION


def _menu_lines(user_id: int) -> list[str]:
    lines = [f"当前操作人员：{user_id}"]
    for section, pages in navigation():
        lines.append(section)
        for page in pages:
            command = _PAGE_COMMANDS.get(page)
            lines.append(f"  {page} ({command})" if command else f"  {page}")
    return lines


def _table(headers: tuple[str, ...], rows: Iterable[tuple[str, ...]]) -> Table:
    return [headers, *rows]


def _repairs(conn: sqlite3.Connection, args: argparse.Namespace) -> Table:
    orders = RepairOrderBook(conn).orders()
    return _table(_REPAIR_HEADERS, (order.display_row() for order in orders))


def _visitors(conn: sqlite3.Connection, args: argparse.Namespace) -> Table:
    log = VisitorLog(conn)
    if args.text:
        found = log.search(_SEARCH_TYPES[args.by], args.text)
    else:
        found = log.visitors()
    return _table(VISITOR_HEADERS, (visitor.display_row() for visitor in found))


def _payments(conn: sqlite3.Connection, args: argparse.Namespace) -> Table:
    ledger = PaymentLedger(conn)
    if args.username is not None:
        found = ledger.by_username(args.username)
    elif args.state == "paid":
        found = ledger.paid()
    else:
        found = ledger.unpaid()
    return _table(_PAYMENT_HEADERS, (payment.display_row() for payment in found))


def _roster(conn: sqlite3.Connection, args: argparse.Namespace) -> Table:
    query = RosterQuery(conn)
    if args.staff is None:
        found = query.all()
    else:
        found = [query.by_staff(parse_staff_id(args.staff))]
    return _table(_ROSTER_HEADERS, (shift.display_row() for shift in found))


def _leaves(conn: sqlite3.Connection, args: argparse.Namespace) -> Table:
    book = LeaveBook(conn, args.user)
    if args.state == "pending":
        return _table(_PENDING_HEADERS, (r.pending_row() for r in book.pending()))
    return _table(_APPROVED_HEADERS, (r.display_row() for r in book.approved()))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="estatedesk", description="Property staff desk."
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="database file")
    parser.add_argument("--user", type=int, default=0, help="id of the operator")
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("menu", help="show the navigation tree")

    repairs = commands.add_parser("repairs", help="list repair work orders")
    repairs.set_defaults(handler=_repairs)

    visitors = commands.add_parser("visitors", help="list or search visitors")
    visitors.add_argument("--by", choices=sorted(_SEARCH_TYPES), default="name")
    visitors.add_argument("--text", default="")
    visitors.set_defaults(handler=_visitors)

    payments = commands.add_parser("payments", help="list payments")
    payments.add_argument("state", choices=("paid", "unpaid"), nargs="?", default="paid")
    payments.add_argument("--username")
    payments.set_defaults(handler=_payments)

    roster = commands.add_parser("roster", help="show the shift roster")
    roster.add_argument("--staff")
    roster.set_defaults(handler=_roster)

    leaves = commands.add_parser("leaves", help="list the operator's leave requests")
    leaves.add_argument(
        "state", choices=("pending", "approved"), nargs="?", default="pending"
    )
    leaves.set_defaults(handler=_leaves)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the desk; returns the exit status."""
    args = _build_parser().parse_args(argv)
    if args.command in (None, "menu"):
        print("\n".join(_menu_lines(args.user)))
        return 0

    handler: Callable[[sqlite3.Connection, argparse.Namespace], Table] = args.handler
    try:
        with closing(sqlite3.connect(args.db)) as conn:
            table = handler(conn, args)
    except (LookupError, ValueError, sqlite3.Error) as exc:
        print(exc, file=sys.stderr)
        return 1
    for row in table:
        print("\t".join(row))
    return 0


if __name__ == "__main__":
    sys.exit(main())