import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
SLUG = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Settings ===")
cur.execute("SELECT id, currency, phone FROM settings")
for r in cur.fetchall():
    print({"id": r[0], "currency": r[1], "phone": r[2]})

print("\n=== Products ===")
if SLUG:
    cur.execute(
        "SELECT id, slug, name, price, grams, category, created_at FROM products WHERE slug=?",
        (SLUG,),
    )
else:
    cur.execute(
        "SELECT id, slug, name, price, grams, category, created_at FROM products ORDER BY id DESC LIMIT 20"
    )
for r in cur.fetchall():
    print(r)

cur.execute("SELECT slug, COUNT(*) FROM products GROUP BY slug HAVING COUNT(*) > 1")
dupes = cur.fetchall()
if dupes:
    print("DUPLICATE SLUGS:", dupes)

print("\n=== Reviews ===")
cur.execute(
    "SELECT id, name, title, approved, created_at FROM reviews ORDER BY id DESC LIMIT 20"
)
for r in cur.fetchall():
    print(r)

print("\n=== Admin sessions ===")
cur.execute(
    "SELECT substr(token_digest, 1, 12), is_admin, created_at, expires_at FROM admin_sessions ORDER BY created_at DESC LIMIT 20"
)
for r in cur.fetchall():
    print(r)

conn.close()
