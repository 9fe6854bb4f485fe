#!/usr/bin/env python3
"""
Spelling word data
==================
Static vocabulary for the offline spelling analyzer.

- COMMON_WORDS: everyday English and workplace e-mail vocabulary (base forms
  plus irregular inflections; regular inflections are handled by affix rules)
- CONTRACTIONS: apostrophe forms that tokenize as single words
- COMMON_MISSPELLINGS: high-confidence typo -> correction map
- BUILT_IN_ALLOWLIST: terms never flagged (products, chat shorthand, mail jargon)
"""

from typing import Dict, FrozenSet

__version__ = "1.0.0"


def _words(block: str) -> FrozenSet[str]:
    return frozenset(block.split())


# Articles, pronouns, determiners, prepositions, conjunctions
_FUNCTION_WORDS = _words("""
    a an the i you he she it we they me him her us them my your his its our their
    mine yours hers ours theirs myself yourself himself herself itself ourselves
    yourselves themselves this that these those who whom whose which what where
    when why how whoever whatever whenever wherever however whichever
    in on at to for with by from of about into onto through during before after
    above below between under over out up down off across along among around
    behind beside besides beyond despite except inside outside near past since
    toward towards upon via within without against throughout underneath per
    and but or so if because as than while although whether though until unless
    nor yet both either neither each every all any some no none most more only
    even still such well then now here there much many few several own same
    another other others else also too very just quite rather almost enough
    not never always often sometimes usually already again once twice ever
    yes okay please thanks thank welcome hello dear regards sincerely cheers
    one two three four five six seven eight nine ten eleven twelve twenty thirty
    forty fifty sixty seventy eighty ninety hundred thousand million billion
    first second third fourth fifth last next half double single
""")

# Verbs with irregular forms spelled out
_VERBS = _words("""
    be am is are was were been being have has had having do does did done doing
    will would shall should may might must can could cannot ought
    say said get got gotten make made go went gone know knew known think thought
    take took taken see saw seen come came want use find found give gave given
    tell told work call try need feel felt become became leave left put mean
    meant keep kept let begin began begun seem help show shown hear heard play
    run ran move live believe bring brought happen write wrote written provide
    sit sat stand stood lose lost pay paid meet met include continue set learn
    learnt change lead led understand understood watch follow stop create speak
    spoke spoken read allow add spend spent grow grew grown open walk win won
    offer remember love consider appear buy bought wait serve die send sent
    expect build built stay fall fell fallen cut reach kill remain suggest raise
    pass sell sold require report decide pull describe develop establish
    determine maintain perform support manage ensure define identify review
    complete document ask answer reply respond forward share attach enclose
    schedule reschedule confirm cancel approve reject submit sign update check
    fix finish start plan prepare discuss mention note notice clarify explain
    agree disagree apologize appreciate thank hope wish worry fear care like
    hate prefer enjoy arrange organize book hold held join attend miss delay
    postpone cover handle deliver receive accept deny refuse avoid solve resolve
    improve reduce increase compare measure test track list print scan save
    delete remove replace edit draft reach contact email mail text ping chat
    phone talk ring rang rung sing sang sung drink drank drunk eat ate eaten
    drive drove driven ride rode ridden fly flew flown swim swam swum throw
    threw thrown draw drew drawn break broke broken choose chose chosen forget
    forgot forgotten forgive forgave forgiven freeze froze frozen hide hid
    hidden shake shook shaken steal stole stolen wake woke woken wear wore worn
    tear tore torn bear bore borne beat beaten bite bit bitten blow blew blown
    catch caught teach taught fight fought seek sought feed fed flee fled
    hang hung lay laid lend lent light lit shoot shot shut slide slid spin spun
    split spread stick stuck strike struck swing swung sweep swept sleep slept
    dig dug bend bent bind bound build deal dealt dream dreamt hurt quit rid
    shine shone sink sank sunk spring sprang sprung stink stank sting stung
    rise rose risen arise arose arisen undergo underwent undergone withdraw
    withdrew withdrawn overcome overcame overtake overtook undertake undertook
    mislead misled misunderstand misunderstood oversee oversaw overseen
    assume involve mention realize recognize regard relate rely remind repeat
    represent request respect result return reveal save select separate settle
    specify state struggle succeed suffer suppose surprise survive suspect
    tend thank touch train transfer travel treat trust turn vary visit vote
    wonder worry achieve acquire adapt address adjust admit adopt advise afford
    aim alert align analyze announce anticipate apply appoint argue arrive
    assess assign assist attempt attract authorize believe benefit borrow
    calculate celebrate challenge charge claim clean clear close collect combine
    commit communicate compete complain concern conclude conduct connect consult
    contain contribute control convert convince coordinate copy correct cost
    count create cross damage debate declare decline decrease defend delegate
    demand demonstrate depend deploy deserve design destroy detect differ
    discover display distribute divide drop earn educate elect eliminate emerge
    emphasize employ enable encourage engage enhance enter escalate estimate
    evaluate examine exceed exchange exclude execute exist expand experience
    explore export express extend face fail fill focus force form found fund
    gain gather generate guarantee guess guide hire host ignore illustrate
    implement imply import indicate inform initiate insist inspect install
    intend introduce invest investigate invite issue justify kick knock label
    land last launch limit link load locate look manufacture mark matter merge
    migrate mind minimize mitigate modify monitor motivate negotiate nominate
    obtain occur operate order organise own participate pause perceive permit
    persuade pick place point possess post pour practice predict present
    preserve press prevent proceed process produce promise promote propose
    protect prove publish purchase pursue push qualify question rate recall
    recommend record recover reflect register reinforce release remind rent
    repair replace research reserve restore restrict retain retire review
    revise reward risk rush satisfy search secure seize shift ship sort sound
    source stress stretch study submit supply surround switch target tackle
    tolerate trigger upgrade upload download urge value verify view warn welcome
    wrap yield
""")

_NOUNS = _words("""
    time year people way day man men woman women child children world life lives
    hand part place case week company system program question government number
    night point home water room mother area money story fact month lot right
    study book eye job word business issue side kind head house service friend
    father power hour game line end member law car city community name president
    team minute idea kid body information back parent face level office door
    health person art war history party result morning reason research girl guy
    moment air teacher force education foot feet boy age policy process music
    market sense nation plan college interest death experience effect class
    control care field development role effort rate heart drug leader light
    voice wife husband police mind difference period value building action
    authority model paper data email mail inbox message messages subject
    recipient sender attachment file files folder link document report draft
    version copy summary agenda meeting call conference invite invitation
    calendar schedule deadline update status project task ticket request
    proposal contract agreement invoice receipt payment budget cost price
    quote order customer client vendor supplier partner colleague manager
    director staff employee boss coworker department division group unit
    organization organisation account password login website page site server
    network computer laptop phone mobile device screen keyboard printer
    software hardware app application tool platform database spreadsheet slide
    presentation deck chart graph table figure image photo picture video audio
    feedback comment note notes question answer response reply thread
    discussion decision approval review revision change edit correction error
    mistake problem solution option choice alternative priority risk concern
    opportunity goal objective target milestone deliverable outcome progress
    delay weekend holiday vacation leave break lunch dinner breakfast coffee
    tea trip travel flight hotel address street road town country state region
    department school university course training session workshop event
    conference interview candidate position role offer salary contract
    benefit insurance tax legal policy procedure guideline standard rule
    requirement specification feature bug fix release launch product item
    inventory stock shipment delivery package box order return refund
    balance amount total sum percent percentage quarter season spring summer
    autumn fall winter january february march april may june july august
    september october november december monday tuesday wednesday thursday
    friday saturday sunday today tomorrow yesterday tonight afternoon evening
    noon midnight daytime future present past beginning middle end start
    finish detail details example instance sample template format style font
    color colour size length width height weight speed quality quantity
    amount volume space room floor desk chair window wall kitchen building
    campus site location venue area zone region client team lead owner
    stakeholder sponsor board committee council panel audience public press
    media news article blog post thing things stuff something anything
    nothing everything someone anyone everyone nobody somebody anybody
    everybody somewhere anywhere everywhere nowhere bit piece type sort kind
    form shape view sight attention interest trust respect support thanks
    apology apologies sorry regret pleasure patience understanding help
    assistance advice guidance suggestion recommendation opinion thought
    point argument evidence proof reason cause effect impact consequence
    situation condition circumstance context background reference source
    resource resources material materials content topic theme matter affair
    relationship connection contact network partner partnership meeting
    minutes record records archive history log entry entries list lists step
    steps stage phase cycle round series sequence order process method
    approach technique strategy tactic policy plan scheme framework structure
    design layout pattern architecture component module element factor aspect
    feature function purpose reason use usage access permission permissions
    license security privacy safety emergency incident accident damage loss
    profit revenue income expense expenses spending sale sales deal offer
    discount promotion campaign brand logo marketing advertising customer
    consumer user users member members guest guests visitor visitors friend
    family children baby babies son daughter brother sister uncle aunt cousin
    grandmother grandfather neighbor neighbour doctor nurse lawyer engineer
    developer designer analyst consultant assistant secretary intern student
    professor researcher scientist writer editor author reader viewer
    driver pilot officer agent representative specialist expert executive
    founder chief head administrator admin coordinator volunteer worker
    question questions answer answers chance luck fun joy anger frustration
    fault blame excuse behavior behaviour attitude tone language grammar
    spelling sentence paragraph letter phrase term terms vocabulary
""")

_ADJECTIVES = _words("""
    good better best new first last long great little own other old right big
    high different small large next early young important few public bad worse
    worst same able sure free true real full special major strong possible
    whole clear recent certain personal open red difficult available likely
    short single low hard past local main current national natural physical
    final general financial blue black white green common poor happy serious
    ready simple left nice late less complete total similar hot dead easy
    quick slow fast busy late early urgent critical crucial essential key basic
    additional extra further previous following upcoming pending overdue
    outstanding internal external official formal informal friendly polite
    rude angry upset sad glad grateful thankful sorry kind helpful useful
    useless valuable effective efficient accurate correct wrong incorrect
    exact precise proper appropriate relevant related specific particular
    various several numerous entire total partial initial original primary
    secondary minor significant huge tiny massive brief short quick detailed
    confidential private secret sensitive secure safe unsafe risky dangerous
    legal illegal valid invalid active inactive online offline remote
    virtual digital manual automatic weekly daily monthly yearly annual
    quarterly hourly late early ready fine okay awesome amazing excellent
    wonderful perfect terrible awful horrible ridiculous unacceptable
    disappointing frustrating annoying confusing interesting exciting boring
    surprising obvious apparent evident aware unaware responsible
    accountable reasonable fair unfair equal fresh clean dirty cheap expensive
    rich wide narrow deep flat heavy light dark bright warm cold cool hot
    positive negative neutral straightforward complex complicated advanced
    flexible stable reliable consistent regular normal usual unusual strange
    weird odd rare frequent constant permanent temporary current modern
    traditional standard typical average ideal actual potential possible
    impossible necessary unnecessary optional mandatory required due
    welcome unable capable happy unhappy pleased concerned worried curious
    eager keen willing unwilling honest direct frank candid calm patient
    impatient careful careless aggressive passive dismissive supportive
    productive proactive reactive positive constructive brilliant smart
    clever stupid silly crazy fantastic fabulous lovely beautiful pretty
    ugly quiet loud silent simple plain fancy global worldwide international
    domestic federal regional corporate commercial technical professional
    academic medical social cultural political economic environmental
    multiple previous prior latter former whole entire
""")

_ADVERBS = _words("""
    however usually really never always sometimes together simply generally
    instead actually already especially probably certainly perhaps finally
    exactly ago recently soon thus almost directly alone quickly slowly
    immediately asap hopefully unfortunately fortunately apparently basically
    clearly definitely obviously honestly seriously literally totally
    completely absolutely entirely fully partly partially mostly mainly
    largely nearly barely hardly merely rarely frequently occasionally
    regularly typically normally currently previously originally initially
    eventually ultimately lately meanwhile otherwise therefore hence
    furthermore moreover nevertheless nonetheless anyway anyhow somehow
    indeed maybe perhaps possibly likely kindly gently briefly shortly
    promptly early later soon sooner latest forward backward ahead aside
    away apart around abroad overseas online upstairs downstairs today
    tonight tomorrow yesterday whenever everywhere anywhere somewhere else
    rather quite pretty fairly somewhat slightly highly deeply strongly
    greatly truly sincerely respectfully warmly best cheers
""")

COMMON_WORDS: FrozenSet[str] = _FUNCTION_WORDS | _VERBS | _NOUNS | _ADJECTIVES | _ADVERBS

CONTRACTIONS: FrozenSet[str] = _words("""
    i'm i've i'll i'd you're you've you'll you'd he's he'll he'd she's she'll
    she'd it's it'll it'd we're we've we'll we'd they're they've they'll they'd
    that's that'll there's there'll here's what's where's who's how's let's
    isn't aren't wasn't weren't don't doesn't didn't haven't hasn't hadn't
    won't wouldn't can't couldn't shouldn't mustn't mightn't needn't shan't
    ain't y'all o'clock
""")

# Typo -> correction. Corrections must themselves be known words.
COMMON_MISSPELLINGS: Dict[str, str] = {
    'teh': 'the',
    'hte': 'the',
    'adn': 'and',
    'taht': 'that',
    'thier': 'their',
    'recieve': 'receive',
    'recieved': 'received',
    'recieving': 'receiving',
    'reciept': 'receipt',
    'beleive': 'believe',
    'acheive': 'achieve',
    'wich': 'which',
    'becuase': 'because',
    'becasue': 'because',
    'wierd': 'weird',
    'freind': 'friend',
    'untill': 'until',
    'tommorow': 'tomorrow',
    'tomorow': 'tomorrow',
    'tommorrow': 'tomorrow',
    'occured': 'occurred',
    'occurence': 'occurrence',
    'seperate': 'separate',
    'seperately': 'separately',
    'definately': 'definitely',
    'definatly': 'definitely',
    'accomodate': 'accommodate',
    'accross': 'across',
    'adress': 'address',
    'agressive': 'aggressive',
    'apparant': 'apparent',
    'arguement': 'argument',
    'begining': 'beginning',
    'buisness': 'business',
    'calender': 'calendar',
    'collegue': 'colleague',
    'comming': 'coming',
    'commitee': 'committee',
    'completly': 'completely',
    'concious': 'conscious',
    'diffrent': 'different',
    'dissapoint': 'disappoint',
    'dissapointed': 'disappointed',
    'embarass': 'embarrass',
    'enviroment': 'environment',
    'existance': 'existence',
    'experiance': 'experience',
    'foriegn': 'foreign',
    'goverment': 'government',
    'grammer': 'grammar',
    'gaurantee': 'guarantee',
    'harrass': 'harass',
    'immediatly': 'immediately',
    'independant': 'independent',
    'knowlege': 'knowledge',
    'liason': 'liaison',
    'maintainance': 'maintenance',
    'maintenence': 'maintenance',
    'neccessary': 'necessary',
    'necessery': 'necessary',
    'noticable': 'noticeable',
    'occassion': 'occasion',
    'paralell': 'parallel',
    'particulary': 'particularly',
    'persistant': 'persistent',
    'personell': 'personnel',
    'posession': 'possession',
    'prefered': 'preferred',
    'privelege': 'privilege',
    'publically': 'publicly',
    'realy': 'really',
    'reccomend': 'recommend',
    'recomend': 'recommend',
    'refered': 'referred',
    'relevent': 'relevant',
    'responsability': 'responsibility',
    'schedual': 'schedule',
    'similiar': 'similar',
    'sincerly': 'sincerely',
    'succesful': 'successful',
    'sucessful': 'successful',
    'suprise': 'surprise',
    'thankyou': 'thank you',
    'therefor': 'therefore',
    'threshhold': 'threshold',
    'truely': 'truly',
    'unfortunatly': 'unfortunately',
    'usefull': 'useful',
    'wether': 'whether',
    'writting': 'writing',
    'attachement': 'attachment',
    'attatched': 'attached',
    'attatchment': 'attachment',
    'meeeting': 'meeting',
    'managment': 'management',
    'availible': 'available',
    'avaliable': 'available',
    'buget': 'budget',
    'confirmaton': 'confirmation',
    'followup': 'follow up',
    'apreciate': 'appreciate',
    'appriciate': 'appreciate',
}

# Never flagged: product names, chat shorthand and mail jargon
BUILT_IN_ALLOWLIST: FrozenSet[str] = _words("""
    gmail outlook yahoo hotmail icloud google microsoft apple amazon zoom slack
    teams webex linkedin github gitlab jira confluence notion dropbox onedrive
    sharepoint salesforce hubspot trello asana excel powerpoint
    ok okay hi hey lol btw fyi imo imho thx tho pls plz asap eod eow cob ooo
    cc bcc fwd re inbox signup login logout onboarding offboarding
    url urls http https www com org net pdf pdfs docx xlsx pptx csv jpg png
    zip api apis faq faqs ceo cfo cto coo hr qa it's
    e-mail emails webinar webinars
""")
