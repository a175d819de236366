"""Order package installs, including a pair of packages that depend on each other."""

import depsort

packages = [
    ("web", ["http", "templates"]),
    ("http", ["sockets", "tls"]),
    ("tls", ["crypto"]),
    ("crypto", ["tls"]),  # mutual dependency
    ("templates", []),
    ("sockets", []),
]

if __name__ == "__main__":
    result = depsort.sort(packages)
    print(f"Plain sort: {result}")

    print("Install groups, dependencies first:")
    for group in depsort.sort_components(packages):
        print("  " + " + ".join(group))

    print(f"Everything web needs: {depsort.closure(packages, 'web')}")
