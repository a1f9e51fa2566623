"""Raw on-disk accounting record layouts.

The kernel writes one fixed-size record per finished process. Two layouts
exist and share the same total size; the version byte at offset 1 tells
them apart:

    Layout  | Version | Elapsed time        | Command field
    --------|---------|---------------------|--------------
    acct    | 2       | comp_t              | 17 bytes
    acct_v3 | 3       | float (plain ticks) | 16 bytes

Fields use the producing host's native byte order with no padding, so the
struct formats below use "=" (native order, standard sizes).

References:
    - linux/include/uapi/linux/acct.h
    - acct(5)
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import ClassVar


ACCT_COMM = 16
"""Length of the command name the kernel records."""

VERSION_OFFSET = 1
"""Offset of the version byte, identical in both layouts."""


@dataclass(frozen=True)
class RawRecordV2:
    """Version 2 record (struct acct).

    Size: 64 bytes
        - flag, version: 1 byte each
        - uid16, gid16, tty: 2 bytes each (legacy 16-bit ids)
        - btime: 4 bytes (process creation time, epoch seconds)
        - utime .. swaps: 9 x comp_t
        - ahz: 2 bytes
        - exitcode: 4 bytes
        - comm: 17 bytes (NUL terminated)
        - etime_hi, etime_lo: 24-bit comp2_t elapsed time
        - uid, gid: 4 bytes each
    """

    flag: int = 0
    version: int = 2
    uid16: int = 0
    gid16: int = 0
    tty: int = 0
    btime: int = 0
    utime: int = 0
    stime: int = 0
    etime: int = 0
    mem: int = 0
    io: int = 0
    rw: int = 0
    minflt: int = 0
    majflt: int = 0
    swaps: int = 0
    ahz: int = 0
    exitcode: int = 0
    comm: bytes = b""
    etime_hi: int = 0
    etime_lo: int = 0
    uid: int = 0
    gid: int = 0

    FORMAT: ClassVar[str] = "=BBHHHI10Hi17sBHII"
    SIZE: ClassVar[int] = struct.calcsize(FORMAT)
    COMM_SIZE: ClassVar[int] = ACCT_COMM + 1

    def to_bytes(self) -> bytes:
        """Serialize to the on-disk layout."""
        return struct.pack(
            self.FORMAT,
            self.flag,
            self.version,
            self.uid16,
            self.gid16,
            self.tty,
            self.btime,
            self.utime,
            self.stime,
            self.etime,
            self.mem,
            self.io,
            self.rw,
            self.minflt,
            self.majflt,
            self.swaps,
            self.ahz,
            self.exitcode,
            self.comm,
            self.etime_hi,
            self.etime_lo,
            self.uid,
            self.gid,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> RawRecordV2:
        """Deserialize from the on-disk layout."""
        if len(data) != cls.SIZE:
            raise ValueError(f"RawRecordV2 requires {cls.SIZE} bytes, got {len(data)}")

        (
            flag, version, uid16, gid16, tty, btime,
            utime, stime, etime, mem, io, rw, minflt, majflt, swaps, ahz,
            exitcode, comm, etime_hi, etime_lo, uid, gid,
        ) = struct.unpack(cls.FORMAT, data)

        return cls(
            flag=flag,
            version=version,
            uid16=uid16,
            gid16=gid16,
            tty=tty,
            btime=btime,
            utime=utime,
            stime=stime,
            etime=etime,
            mem=mem,
            io=io,
            rw=rw,
            minflt=minflt,
            majflt=majflt,
            swaps=swaps,
            ahz=ahz,
            exitcode=exitcode,
            comm=comm,
            etime_hi=etime_hi,
            etime_lo=etime_lo,
            uid=uid,
            gid=gid,
        )


@dataclass(frozen=True)
class RawRecordV3:
    """Version 3 record (struct acct_v3).

    Size: 64 bytes
        - flag, version: 1 byte each
        - tty: 2 bytes
        - exitcode, uid, gid, pid, ppid, btime: 4 bytes each
        - etime: 4-byte float holding a plain tick count
        - utime .. swaps: 8 x comp_t
        - comm: 16 bytes (NUL padded, not necessarily terminated)
    """

    flag: int = 0
    version: int = 3
    tty: int = 0
    exitcode: int = 0
    uid: int = 0
    gid: int = 0
    pid: int = 0
    ppid: int = 0
    btime: int = 0
    etime: float = 0.0
    utime: int = 0
    stime: int = 0
    mem: int = 0
    io: int = 0
    rw: int = 0
    minflt: int = 0
    majflt: int = 0
    swaps: int = 0
    comm: bytes = b""

    FORMAT: ClassVar[str] = "=BBHi5If8H16s"
    SIZE: ClassVar[int] = struct.calcsize(FORMAT)
    COMM_SIZE: ClassVar[int] = ACCT_COMM

    def to_bytes(self) -> bytes:
        """Serialize to the on-disk layout."""
        return struct.pack(
            self.FORMAT,
            self.flag,
            self.version,
            self.tty,
            self.exitcode,
            self.uid,
            self.gid,
            self.pid,
            self.ppid,
            self.btime,
            self.etime,
            self.utime,
            self.stime,
            self.mem,
            self.io,
            self.rw,
            self.minflt,
            self.majflt,
            self.swaps,
            self.comm,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> RawRecordV3:
        """Deserialize from the on-disk layout."""
        if len(data) != cls.SIZE:
            raise ValueError(f"RawRecordV3 requires {cls.SIZE} bytes, got {len(data)}")

        (
            flag, version, tty, exitcode, uid, gid, pid, ppid, btime, etime,
            utime, stime, mem, io, rw, minflt, majflt, swaps, comm,
        ) = struct.unpack(cls.FORMAT, data)

        return cls(
            flag=flag,
            version=version,
            tty=tty,
            exitcode=exitcode,
            uid=uid,
            gid=gid,
            pid=pid,
            ppid=ppid,
            btime=btime,
            etime=etime,
            utime=utime,
            stime=stime,
            mem=mem,
            io=io,
            rw=rw,
            minflt=minflt,
            majflt=majflt,
            swaps=swaps,
            comm=comm,
        )


RECORD_SIZE = RawRecordV2.SIZE
"""Physical size of one record; both layouts occupy the same 64 bytes."""

