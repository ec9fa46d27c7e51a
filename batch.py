# ==============================================================================
# Author : Yuxuan Zhang (robotics@z-yx.cc)
# License: MIT
# ==============================================================================
from os import cpu_count
from sys import stdin, stdout, stderr, executable
from yaml import safe_load as parse
from typing import Iterable
from argparse import ArgumentParser
from multiprocessing import Pool
from subprocess import Popen, PIPE
from time import time
from tqdm import tqdm


class Python:
    def __init__(self, module: str):
        self.module = module

    def __call__(self, *args, **kwargs):
        kw = (f"--{k.replace('_', '-')}={v}" for k, v in kwargs.items())
        args = executable, "-m", self.module, *args, *kw
        print(*args, file=stderr)
        return Popen(args, stdout=PIPE)


def parse_outputs(stream: Iterable[bytes]):
    """
    Collect the "# key : value" summary lines of a simulation run
    """
    meta = dict[str, str]()
    for line in stream:
        line = line.decode("utf-8").strip()
        if line.startswith("#") and ":" in line:
            k, v = (s.strip() for s in line[1:].split(":", 1))
            meta[k] = v
    return meta


def format_message(src: str, dt: float, meta: dict[str, str]) -> str:
    msg = [
        src.rjust(4),
        f"{dt:.2f}s",
        f"ticks {meta.get('ticks', '--').rjust(6)}",
        f"travel {meta.get('travel', '--.--')[:7].rjust(7)}",
        f"circumvents {meta.get('circumvents', '-')}",
    ]
    if "abort" in meta:
        msg.append("aborted: " + meta["abort"])
    else:
        msg.append(meta.get("status", "UNKNOWN"))
    return " | ".join(msg)


def exec(world: str, src: str, kw: dict[str, str]):
    t0 = time()
    proc = Python("navigator")(world, **kw)
    meta = parse_outputs(proc.stdout)
    proc.wait()
    t1 = time()
    return src, t1 - t0, meta


def unpack_exec(args):
    return exec(*args)


def tasks(world: str, SRC: dict[str, list[float]], save: bool = False, **kw):
    if not SRC:
        raise ValueError("Missing SRC in batch configuration")
    for src, p0 in SRC.items():
        local_kw = dict(**kw, src=",".join(map(str, p0)))
        if save:
            local_kw["prefix"] = f"var/{src}/"
        yield world, src, local_kw


if __name__ == "__main__":
    parser = ArgumentParser()
    parser.add_argument("world", type=str, nargs=1)
    parser.add_argument("--save", action="store_true")
    parser.add_argument("--max-ticks", type=int, default=50000)
    args = parser.parse_args()
    world = str(args.world[0])
    config = parse(stdin)
    jobs = list(
        tasks(world, config.get("SRC"), save=args.save, max_ticks=args.max_ticks)
    )
    progress = tqdm(
        total=len(jobs),
        desc="Bug Navigator",
        leave=False,
        dynamic_ncols=True,
        file=stdout,
    )
    with Pool(max(1, cpu_count() // 2)) as pool:
        for src, dt, meta in pool.imap_unordered(unpack_exec, jobs):
            progress.write(format_message(src, dt, meta))
            progress.update(1)
    progress.clear()
