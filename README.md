# estatedesk

Staff-side record keeping for a residential estate, kept in an SQLite
database. Each part of the package works on an open `sqlite3.Connection`
whose tables already exist. You can use it from scripts or from other
applications, or through the `estatedesk` command.

## Install

```
pip install .
pip install ".[test]"   # also installs pytest for the test suite
```

## Modules

| Module | What it covers |
| --- | --- |
| `estatedesk.parking` | The `parkingspace` table through `ParkingSpaceDirectory`. `all()` lists every space. `find(space_id)` looks up one space; a blank number lists them all. `vacant()` returns spaces whose nature is 0. `occupied()` returns sold or rented spaces. It also has `nature_label` and `review_label`. |
| `estatedesk.payments` | The `payment` table through `PaymentLedger`. `paid()` returns rows that have a contact number and `unpaid()` returns rows without one. It also offers `by_username`, `search(field, text)` (a `LIKE` match on a `SearchField`: period, time or name) and `add(...)`. `add` raises a repair or parking-purchase charge that is recorded as paid in full offline. |
| `estatedesk.repairs` | The `maintenance` table through `RepairOrderBook`. `orders()` lists the orders. `record_outcome(request_id, completed, handler, repair_date)` records the result. `delete(request_id)` removes an order. |
| `estatedesk.roster` | Read-only access to the `shifts` table through `RosterQuery`. `all()` lists every shift. `by_staff(staff_id)` returns one employee's first shift and raises `LookupError` if there is none. `parse_staff_id` reads a typed id. |
| `estatedesk.scheduling` | Quarterly shifts through `ShiftScheduler(conn, user_id)`, with `shifts_for`, `add`, `edit` and `delete`. `quarter_options()` lists the quarters from 2025 to 2028. It also has `shift_label` and `ShiftKind`. Refused changes raise `SchedulingError`. |
| `estatedesk.leaves` | One employee's requests in the `leaves` table through `LeaveBook(conn, user_id)`. `user_info()`, `pending()` and `approved()` read the requests. `submit(staff_name, start, end, reason)` files a new one and raises `LeaveValidationError` on bad input. |
| `estatedesk.training` | The `trains` table through `TrainingBook`. It offers `records`, `add`, `edit`, `delete` and `search(by, text)` with a `TrainingSearch` of staff id, staff name or A–D grade. Grades are handled by `grade_label` and `grade_value`. Errors raise `TrainingError`. |
| `estatedesk.visitors` | The `visiter` table through `VisitorLog`. It offers `visitors`, `search(by, text)` (an exact match on name, address or date), `update(visitor_id, field, value)` and `add(...)`. Errors raise `VisitorError`. |
| `estatedesk.reports` | Per-category totals for a calendar year from the `income` or `expense` table. `yearly_income` and `yearly_expense` cover the year before `today`. `YearlySummary.rows()` gives table cells plus a total row. |
| `estatedesk.cli` | `navigation()` returns the staff menu tree. `main()` runs the `estatedesk` command. |

## Example

```python
import sqlite3
from estatedesk.parking import ParkingSpaceDirectory
from estatedesk.reports import yearly_income

conn = sqlite3.connect("try.db")

for space in ParkingSpaceDirectory(conn).vacant():
    print(space.space_id, space.car_type, space.nature_text)

for row in yearly_income(conn).rows():
    print(row)
```

## Command

```
estatedesk
```

Run with no arguments, or with `menu`, the command prints the navigation menu and the operator id.

It also has a few subcommands that print tab-separated tables with a header row:

```
estatedesk repairs
estatedesk visitors [--by name|address|date] [--text TEXT]
estatedesk payments [paid|unpaid] [--username NAME]
estatedesk roster [--staff ID]
estatedesk --user ID leaves [pending|approved]
```

The global options go before the subcommand:

- `--db FILE` chooses the database file. The default is `try.db`.
- `--user ID` sets the operator id. The default is `0`.

If a lookup fails, input is invalid or a database error occurs, the command prints the message to stderr and exits with status 1.

## What it does not do

- The package does not create or migrate the database schema. The tables must already be there.
- The command is read-only. Adding, editing and deleting records is available only through the Python classes.
- The menu lists several pages that the package does not implement:
  - attendance check-in (出勤打卡)
  - house rental management (房屋出租管理)
  - announcements (通知公告)
  - vehicle registration (车辆登记)
  - vehicle entry/exit records (车辆进出记录)
- The package has no login and no graphical interface.

## Tests

```
pytest
```