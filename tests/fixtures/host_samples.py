"""Canned command output and file contents from a small Ubuntu host."""

from __future__ import annotations

import json

HOSTNAME = "web01\n"
UNAME_R = "6.8.0-45-generic\n"
UNAME_M = "x86_64\n"

OS_RELEASE = """PRETTY_NAME="Ubuntu 24.04.1 LTS"
NAME="Ubuntu"
VERSION_ID="24.04"
VERSION="24.04.1 LTS (Noble Numbat)"
VERSION_CODENAME=noble
ID=ubuntu
"""

PROC_UPTIME = "183600.52 701234.11\n"

PROC_STAT = """cpu  4705 356 584 3699 23 23 0 0 0 0
intr 1462898 39 9 0 0
ctxt 115315
btime 1735689600
processes 4235
"""

IP_ADDR = json.dumps(
    [
        {
            "ifindex": 1,
            "ifname": "lo",
            "mtu": 65536,
            "operstate": "UNKNOWN",
            "link_type": "loopback",
            "address": "00:00:00:00:00:00",
            "addr_info": [
                {"family": "inet", "local": "127.0.0.1", "prefixlen": 8},
                {"family": "inet6", "local": "::1", "prefixlen": 128},
            ],
        },
        {
            "ifindex": 2,
            "ifname": "eth0",
            "mtu": 1500,
            "operstate": "UP",
            "link_type": "ether",
            "address": "52:54:00:12:34:56",
            "addr_info": [
                {"family": "inet", "local": "10.0.0.15", "prefixlen": 24, "dynamic": True},
                {"family": "inet", "local": "10.0.0.16", "prefixlen": 24},
                {"family": "inet6", "local": "fe80::5054:ff:fe12:3456", "prefixlen": 64},
            ],
        },
        {
            "ifindex": 3,
            "ifname": "wlan0",
            "mtu": 1500,
            "operstate": "LOWERLAYERDOWN",
            "link_type": "ether",
            "address": "a4:c3:f0:aa:bb:cc",
            "addr_info": [],
        },
    ]
)

NET_SPEEDS = {
    "/sys/class/net/lo/speed": None,
    "/sys/class/net/eth0/speed": "1000\n",
    "/sys/class/net/wlan0/speed": "-1\n",
}

DMI = {
    "/sys/class/dmi/id/bios_vendor": "American Megatrends Inc.\n",
    "/sys/class/dmi/id/bios_version": "F.42\n",
    "/sys/class/dmi/id/bios_date": "03/15/2023\n",
    "/sys/class/dmi/id/bios_release": "5.17\n",
    "/sys/class/dmi/id/sys_vendor": "HP\n",
    "/sys/class/dmi/id/product_name": "ProDesk 600 G6\n",
    "/sys/class/dmi/id/board_vendor": "HP\n",
    "/sys/class/dmi/id/board_name": "8715\n",
    "/sys/class/dmi/id/board_version": "KBC Version 08.57.00\n",
    "/sys/class/dmi/id/board_asset_tag": "To Be Filled By O.E.M.\n",
    "/sys/class/dmi/id/chassis_type": "3\n",
    "/sys/class/dmi/id/chassis_vendor": "HP\n",
    # product_serial / board_serial are root-only: absent
}

DPKG_OUTPUT = (
    "ii \topenssh-server\t1:9.6p1-3ubuntu13.5\tamd64\t2048\tUbuntu Developers <ubuntu-devel-discuss@lists.ubuntu.com>\n"
    "ii \tbash\t5.2.21-2ubuntu4\tamd64\t1792\tUbuntu Developers <ubuntu-devel-discuss@lists.ubuntu.com>\n"
    "rc \told-package\t1.0\tamd64\t10\tNobody\n"
    "ii \tpython3-yaml\t6.0.1-2build2\tamd64\t\tUbuntu Developers <ubuntu-devel-discuss@lists.ubuntu.com>\n"
)

RPM_OUTPUT = (
    "bash\t5.2.26-3.fc40\tx86_64\t8388608\tFedora Project\n"
    "gpg-pubkey\t18b8e74c-62f2920f\t(none)\t0\t(none)\n"
)

LSBLK = json.dumps(
    {
        "blockdevices": [
            {
                "name": "sda",
                "type": "disk",
                "size": 500107862016,
                "model": "Samsung SSD 870",
                "vendor": "ATA     ",
                "serial": "S5Y1NX0T123456",
                "tran": "sata",
                "rota": False,
                "children": [
                    {"name": "sda1", "type": "part", "size": 536870912},
                    {"name": "sda2", "type": "part", "size": 499569786880},
                ],
            },
            {
                "name": "sdb",
                "type": "disk",
                "size": 2000398934016,
                "model": "WDC WD20EZRZ",
                "vendor": None,
                "serial": None,
                "tran": "usb",
                "rota": "1",
            },
            {"name": "sr0", "type": "rom", "size": 1073741312, "model": "DVD-RW", "tran": "sata", "rota": True},
            {"name": "loop0", "type": "loop", "size": 4096},
        ]
    }
)

MEMINFO = """MemTotal:       16318412 kB
MemFree:         1240236 kB
MemAvailable:    8159206 kB
Buffers:          341020 kB
SwapTotal:       2097148 kB
SwapFree:        2097148 kB
HugePages_Total:       0
"""

LSCPU = json.dumps(
    {
        "lscpu": [
            {"field": "Architecture:", "data": "x86_64"},
            {"field": "CPU(s):", "data": "8"},
            {
                "field": "Vendor ID:",
                "data": "GenuineIntel",
                "children": [
                    {"field": "Model name:", "data": "Intel(R) Core(TM) i7-10700 CPU @ 2.90GHz"},
                    {"field": "Thread(s) per core:", "data": "2"},
                    {"field": "Core(s) per socket:", "data": "4"},
                    {"field": "Socket(s):", "data": "1"},
                    {"field": "CPU max MHz:", "data": "4800.0000"},
                ],
            },
            {"field": "Virtualization features:", "data": None, "children": [{"field": "Virtualization:", "data": "VT-x"}]},
            {"field": "Caches (sum of all):", "data": None, "children": [{"field": "L3:", "data": "16 MiB (1 instance)"}]},
        ]
    }
)

SYSTEMCTL_UNITS = """cron.service loaded active running Regular background program processing daemon
ssh.service loaded active running OpenBSD Secure Shell server
ufw.service loaded active exited Uncomplicated firewall
apache2.service loaded failed failed The Apache HTTP Server
● plymouth-quit.service not-found inactive dead plymouth-quit.service
weird.service loaded active waiting Something odd
"""

SYSTEMCTL_UNIT_FILES = """apache2.service enabled enabled
cron.service enabled enabled
ssh.service enabled enabled
ufw.service disabled enabled
weird.service bad -
"""

LSPCI = """Slot:\t00:02.0
Class:\tVGA compatible controller
Vendor:\tIntel Corporation
Device:\tCometLake-S GT2 [UHD Graphics 630]
SVendor:\tHewlett-Packard Company
SDevice:\tDevice 8715
Rev:\t05
Driver:\ti915
Module:\ti915

Slot:\t00:14.0
Class:\tUSB controller
Vendor:\tIntel Corporation
Device:\tComet Lake USB 3.1 xHCI Host Controller

Slot:\t01:00.0
Class:\t3D controller
Vendor:\tNVIDIA Corporation
Device:\tTU117M [GeForce GTX 1650 Mobile / Max-Q]
Rev:\ta1
"""
